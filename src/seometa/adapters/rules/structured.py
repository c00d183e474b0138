from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Mapping, Optional

from seometa.domain.models import Finding, PageMetadata
from seometa.domain.schema import FIELD_JSON_LD, SEVERITY_ERROR


@dataclass(frozen=True, slots=True)
class JsonLdRule:
    """
    JSON-LD must parse, and its top level must be an object or an array.
    Whether it matches the visible page content is not checked.
    """
    field: str = FIELD_JSON_LD
    name: str = "json-ld-syntax"

    def check(self, page: PageMetadata, *, metadata: Optional[Mapping[str, object]] = None) -> list[Finding]:
        value = getattr(page, self.field)
        if value is None:
            return []

        try:
            data = json.loads(value)
        except json.JSONDecodeError as e:
            return [self._error(f"{self.field} is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})")]
        except RecursionError:
            return [self._error(f"{self.field} is nested too deeply to parse")]

        if not isinstance(data, (dict, list)):
            return [self._error(f"{self.field} must be a JSON object or array, got {type(data).__name__}")]
        return []

    def _error(self, message: str) -> Finding:
        return Finding(field=self.field, severity=SEVERITY_ERROR, message=message, rule=self.name)
