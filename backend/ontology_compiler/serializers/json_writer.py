import json
from typing import Any

from ontology_compiler.serializers.plain import to_plain


INDENT = 2


def spec_to_json(spec: Any) -> str:
    """Standard data-interchange output, 2-space indentation."""
    return json.dumps(to_plain(spec), indent=INDENT, ensure_ascii=False)
