import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Union

from ontology_compiler import config
from ontology_compiler.compiler import identifiers as ids
from ontology_compiler.compiler.operation import (
    SECURITY_SCHEME,
    compile_action,
    derive_identifiers,
)
from ontology_compiler.compiler.types import (
    ActionFragment,
    ApiDocument,
    Collision,
    CollisionPolicy,
)
from ontology_compiler.ir.errors import CompilationError, IdentifierCollisionError
from ontology_compiler.ir.ontology import Action, OntologyObject
from ontology_compiler.serializers.plain import to_plain

logger = logging.getLogger(__name__)


OPENAPI_VERSION = "3.0.3"
FULL_DOCUMENT_DESCRIPTION = "Auto-generated REST API specification from Ontology design."

SECURITY_SCHEMES = {
    SECURITY_SCHEME: {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
        "description": "JWT Bearer token authentication",
    }
}


def resolve_policy(policy: Union[CollisionPolicy, str, None]) -> CollisionPolicy:
    if isinstance(policy, CollisionPolicy):
        return policy

    value = policy or config.COLLISION_POLICY
    try:
        return CollisionPolicy(value.lower())
    except ValueError as exc:
        allowed = ", ".join(p.value for p in CollisionPolicy)
        raise CompilationError(
            f"Unknown collision policy '{value}', expected one of: {allowed}"
        ) from exc


def _owner(object_name: str, action_name: str) -> str:
    return f"{object_name}.{action_name}"


def _claim(kind: str, key: str) -> str:
    return f"{kind}:{key}"


def _fragment_claims(fragment: ActionFragment) -> List[tuple]:
    """(kind, key) pairs one action occupies in the document."""
    claims = [
        ("path", f"{fragment.method.upper()} {fragment.path}"),
        ("operation_id", fragment.identifiers.operation_id),
    ]
    claims.extend(("schema", name) for name in fragment.schemas)
    return claims


# ============================================================
# Fold steps
# ============================================================

def empty_document(
    title: str,
    version: Optional[str] = None,
    description: Optional[str] = None,
    tags: Optional[List[Dict[str, str]]] = None,
) -> ApiDocument:
    return ApiDocument(
        title=title,
        version=version or config.API_VERSION,
        description=description,
        tags=list(tags or []),
    )


def merge_fragment(
    document: ApiDocument,
    fragment: ActionFragment,
    policy: Union[CollisionPolicy, str, None] = None,
) -> ApiDocument:
    """
    Return a new document with the fragment folded in.
    Verb entries on an existing path are merged; a same path and verb,
    or a same-name schema, is a collision handled by `policy`.
    """
    policy = resolve_policy(policy)
    owner = _owner(fragment.object_name, fragment.action_name)

    claims = dict(document.claims)
    collisions = list(document.collisions)

    for kind, key in _fragment_claims(fragment):
        claim = _claim(kind, key)
        previous = claims.get(claim)

        if previous is not None:
            if policy is CollisionPolicy.ERROR:
                raise IdentifierCollisionError(
                    kind, key, fragment.object_name, fragment.action_name
                )
            collision = Collision(
                kind=kind,
                key=key,
                object_name=fragment.object_name,
                action_name=fragment.action_name,
                previous_owner=previous,
                resolution="overwrite",
            )
            logger.warning(
                "%s '%s' of %s overwrites the one from %s",
                kind, key, owner, previous,
            )
            collisions.append(collision)

        claims[claim] = owner

    paths = dict(document.paths)
    paths[fragment.path] = {
        **paths.get(fragment.path, {}),
        fragment.method: fragment.operation,
    }

    schemas = dict(document.schemas)
    schemas.update(fragment.schemas)

    return replace(
        document,
        paths=paths,
        schemas=schemas,
        claims=claims,
        collisions=collisions,
    )


def _free_identifier(document: ApiDocument, kind: str, key: str, separator: str) -> str:
    candidate = key
    n = 2
    while _claim(kind, candidate) in document.claims:
        candidate = ids.suffixed(key, n, separator)
        n += 1
    return candidate


def fold_action(
    document: ApiDocument,
    action: Action,
    object_name: str,
    policy: Union[CollisionPolicy, str, None] = None,
) -> ApiDocument:
    policy = resolve_policy(policy)
    identifiers = derive_identifiers(action, object_name)

    if policy is CollisionPolicy.SUFFIX:
        renamed = replace(
            identifiers,
            operation_id=_free_identifier(
                document, "operation_id", identifiers.operation_id, "_"
            ),
            request_schema=_free_identifier(
                document, "schema", identifiers.request_schema, ""
            ),
            response_schema=_free_identifier(
                document, "schema", identifiers.response_schema, ""
            ),
        )
        if renamed != identifiers:
            logger.info(
                "Renamed identifiers of %s to avoid collisions: %s",
                _owner(object_name, action.name), renamed.operation_id,
            )
        identifiers = renamed

    fragment = compile_action(action, object_name, identifiers)
    return merge_fragment(document, fragment, policy)


def fold_actions(
    document: ApiDocument,
    pairs: Iterable[tuple],
    policy: Union[CollisionPolicy, str, None] = None,
) -> ApiDocument:
    """Fold (object_name, action) pairs in input order."""
    for object_name, action in pairs:
        document = fold_action(document, action, object_name, policy)
    return document


# ============================================================
# Document builders
# ============================================================

def build_action_document(
    action: Action,
    object_name: str,
    policy: Union[CollisionPolicy, str, None] = None,
) -> ApiDocument:
    document = empty_document(
        title=f"{action.name} API",
        description=action.description or None,
    )
    return fold_action(document, action, object_name, policy)


def build_object_document(
    obj: OntologyObject,
    policy: Union[CollisionPolicy, str, None] = None,
) -> ApiDocument:
    document = empty_document(
        title=f"{obj.name} API",
        description=f"REST API for {obj.name} operations.\n\n{obj.description or ''}",
        tags=[{"name": obj.name, "description": f"Operations on {obj.name}"}],
    )
    document = fold_actions(
        document, ((obj.name, action) for action in obj.actions), policy
    )
    logger.debug(
        "Object %s: %d paths, %d schemas",
        obj.name, len(document.paths), len(document.schemas),
    )
    return document


def build_full_document(
    objects: List[OntologyObject],
    project_name: Optional[str] = None,
    policy: Union[CollisionPolicy, str, None] = None,
) -> ApiDocument:
    objects = [obj for obj in objects if obj.actions]

    document = empty_document(
        title=project_name or config.API_TITLE,
        description=FULL_DOCUMENT_DESCRIPTION,
        tags=[
            {
                "name": obj.name,
                "description": obj.description or f"Operations on {obj.name}",
            }
            for obj in objects
        ],
    )
    document = fold_actions(
        document,
        ((obj.name, action) for obj in objects for action in obj.actions),
        policy,
    )
    logger.info(
        "Assembled '%s': %d objects, %d paths, %d schemas, %d collisions",
        document.title, len(objects), len(document.paths),
        len(document.schemas), len(document.collisions),
    )
    return document


# ============================================================
# OpenAPI output
# ============================================================

def document_to_dict(document: ApiDocument) -> dict:
    info = {"title": document.title, "version": document.version}
    if document.description is not None:
        info["description"] = document.description

    spec = {
        "openapi": OPENAPI_VERSION,
        "info": info,
        "paths": to_plain(document.paths),
        "components": {
            "schemas": to_plain(document.schemas),
            "securitySchemes": to_plain(SECURITY_SCHEMES),
        },
    }
    if document.tags:
        spec["tags"] = to_plain(document.tags)
    return spec


def compile_action_document(action: Action, object_name: str, policy=None) -> dict:
    return document_to_dict(build_action_document(action, object_name, policy))


def compile_object_document(obj: OntologyObject, policy=None) -> dict:
    return document_to_dict(build_object_document(obj, policy))


def compile_full_document(
    objects: List[OntologyObject],
    project_name: Optional[str] = None,
    policy=None,
) -> dict:
    return document_to_dict(build_full_document(objects, project_name, policy))
