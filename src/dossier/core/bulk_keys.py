from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass

from dossier.core.errors import ValidationError


@dataclass(frozen=True)
class BulkFormKey:
    langcode: str
    entity_type_id: str
    entity_id: str
    revision_id: str | None = None


def encode_bulk_form_key(key: BulkFormKey, prefix: str = "item") -> str:
    parts: list[str] = [prefix, key.langcode, key.entity_type_id, key.entity_id]
    if key.revision_id is not None:
        parts.append(key.revision_id)
    return base64.b64encode(json.dumps(parts).encode("utf-8")).decode("ascii")


def decode_bulk_form_key(encoded: str) -> BulkFormKey:
    """Decode a base64 JSON selection key.

    The payload is ``[prefix, langcode, entity_type_id, entity_id]`` with an
    optional trailing revision id.
    """
    try:
        parts = json.loads(base64.b64decode(encoded, validate=True).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValidationError(f"Malformed selection key: {encoded!r}") from exc

    if not isinstance(parts, list) or len(parts) not in (4, 5):
        raise ValidationError(f"Malformed selection key: {encoded!r}")

    revision_id = str(parts.pop()) if len(parts) == 5 else None
    _, langcode, entity_type_id, entity_id = parts
    return BulkFormKey(
        langcode=str(langcode),
        entity_type_id=str(entity_type_id),
        entity_id=str(entity_id),
        revision_id=revision_id,
    )
