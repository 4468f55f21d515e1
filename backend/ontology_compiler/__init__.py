"""
Ontology interface compiler.

Translates an authored ontology (objects and their actions) into an
OpenAPI document, AI-agent tool descriptors in several dialects, tool
source code, and JSON/YAML text.
"""

from ontology_compiler.codegen.python_langchain import generate_langchain_python
from ontology_compiler.codegen.typescript_openai import generate_openai_typescript
from ontology_compiler.compiler import (
    CollisionPolicy,
    compile_action_document,
    compile_full_document,
    compile_object_document,
)
from ontology_compiler.ir.ontology import OntologyDocument
from ontology_compiler.pipeline import compile_openapi, compile_tools
from ontology_compiler.serializers.json_writer import spec_to_json
from ontology_compiler.serializers.yaml_writer import spec_to_yaml
from ontology_compiler.tools.dialects import (
    ToolFormat,
    generate_all_tool_specs,
    generate_object_tool_specs,
    generate_tool_spec,
    tools_to_json,
)
from ontology_compiler.validation import raise_on_errors, validate_ontology

__all__ = [
    "CollisionPolicy",
    "OntologyDocument",
    "ToolFormat",
    "compile_action_document",
    "compile_full_document",
    "compile_object_document",
    "compile_openapi",
    "compile_tools",
    "generate_all_tool_specs",
    "generate_langchain_python",
    "generate_object_tool_specs",
    "generate_openai_typescript",
    "generate_tool_spec",
    "raise_on_errors",
    "spec_to_json",
    "spec_to_yaml",
    "tools_to_json",
    "validate_ontology",
]
