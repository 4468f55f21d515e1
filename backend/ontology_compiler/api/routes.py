import logging

from fastapi import APIRouter, HTTPException

from ontology_compiler.compiler.document import document_to_dict
from ontology_compiler.ir.errors import CompilationError, ReferenceNotFoundError
from ontology_compiler.ir.ontology import OntologyDocument
from ontology_compiler.pipeline import build_document, compile_tools
from ontology_compiler.schemas import (
    CompileSpecRequest,
    CompileSpecResponse,
    CompileToolsRequest,
    CompileToolsResponse,
    ValidateRequest,
)
from ontology_compiler.serializers.json_writer import spec_to_json
from ontology_compiler.serializers.yaml_writer import spec_to_yaml
from ontology_compiler.validation import validate_ontology

logger = logging.getLogger(__name__)

router = APIRouter()


def _raise_http(exc: CompilationError):
    if isinstance(exc, ReferenceNotFoundError):
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/compile/openapi", response_model=CompileSpecResponse)
def compile_openapi_spec(request: CompileSpecRequest):
    try:
        document = build_document(
            OntologyDocument(objects=request.objects, project_name=request.project_name),
            scope=request.scope,
            object_id=request.object_id,
            action_name=request.action_name,
            policy=request.collision_policy,
        )
    except CompilationError as exc:
        logger.warning("OpenAPI compilation failed: %s", exc)
        _raise_http(exc)

    spec = document_to_dict(document)
    content = spec_to_json(spec) if request.format == "json" else spec_to_yaml(spec)
    diagnostics = [collision.to_dict() for collision in document.collisions]

    return CompileSpecResponse(
        status="warning" if diagnostics else "success",
        format=request.format,
        content=content,
        diagnostics=diagnostics,
    )


@router.post("/compile/tools", response_model=CompileToolsResponse)
def compile_tool_specs(request: CompileToolsRequest):
    try:
        content = compile_tools(
            request.objects,
            fmt=request.format,
            output=request.output,
            scope=request.scope,
            object_id=request.object_id,
            action_name=request.action_name,
        )
    except ReferenceNotFoundError as exc:
        _raise_http(exc)
    except CompilationError as exc:
        # Unsupported format/output combination
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return CompileToolsResponse(
        status="success",
        format=request.format,
        output=request.output,
        content=content,
    )


@router.post("/validate")
def validate_document(request: ValidateRequest):
    result = validate_ontology(
        OntologyDocument(objects=request.objects),
        strict=request.strict,
    )
    return result.to_dict()
