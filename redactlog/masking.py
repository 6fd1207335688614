"""Sensitive field classification and recursive payload masking.

A field is sensitive when its name, lower-cased, is a member of the
classifier set. Matching is exact (``"password"`` matches ``"Password"``
but not ``"password_hint"``) and does not depend on where the key sits in
the payload.

Usage:
    from redactlog.masking import mask_fields, seed

    seed(["lastName"])
    mask_fields({"user": {"lastName": "Doe", "age": 42}})
    # {"user": {"lastName": "***", "age": 42}}
"""

import threading
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence

REDACTED_VALUE = "***"

DEFAULT_SENSITIVE_FIELDS = frozenset(
    {
        "name",
        "firstname",
        "lastname",
        "cardno",
        "passport",
        "passportid",
        "passportno",
        "nationalid",
        "cid",
        "citizen_id",
        "cvc",
        "cvv",
        "password",
        "x-api-key",
        "authorization",
        "x-authorization",
    }
)


class SensitiveFields:
    """Additive, case-insensitive set of sensitive field names.

    Writes replace the underlying frozenset under a lock, so readers on the
    logging path never need to synchronise and never see a partial update.
    There is deliberately no way to remove a name.
    """

    def __init__(self, names: Iterable[str] = DEFAULT_SENSITIVE_FIELDS) -> None:
        self._lock = threading.Lock()
        self._names: FrozenSet[str] = frozenset()
        self.seed(names)

    @property
    def names(self) -> FrozenSet[str]:
        return self._names

    def seed(self, names: Iterable[str]) -> None:
        """Add names to the set. Empty names are ignored."""
        lowered = {str(name).lower() for name in names if name}
        if not lowered:
            return
        with self._lock:
            self._names = self._names | lowered

    def is_sensitive(self, name: Any) -> bool:
        if name is None:
            return False
        return str(name).lower() in self._names

    def __contains__(self, name: Any) -> bool:
        return self.is_sensitive(name)

    def __len__(self) -> int:
        return len(self._names)


# Process-wide classifier used by loggers that are not given their own.
sensitive_fields = SensitiveFields()


def is_sensitive(name: Any) -> bool:
    """Check a field name against the process-wide classifier."""
    return sensitive_fields.is_sensitive(name)


def seed(names: Iterable[str]) -> None:
    """Extend the process-wide classifier with ``names``."""
    sensitive_fields.seed(names)


def mask_fields(
    fields: Mapping[str, Any], classifier: Optional[SensitiveFields] = None
) -> Dict[str, Any]:
    """Return a masked copy of ``fields``.

    Rules, applied per key:
        - sensitive key: the value becomes REDACTED_VALUE, whatever it is,
          and nothing below it is visited
        - mapping value: masked recursively
        - list or tuple value: mapping elements are masked, other elements
          are kept as they are
        - anything else: kept as is

    The input is never modified; nested mappings and sequences are copied.
    A mapping or sequence that contains itself is replaced by REDACTED_VALUE
    where it recurs.

    Args:
        fields: Keyed payload to mask.
        classifier: Classifier to consult. Defaults to the process-wide one.

    Returns:
        A new dict with the same keys as ``fields``.
    """
    if classifier is None:
        classifier = sensitive_fields
    return _mask_mapping(fields, classifier, frozenset())


def _mask_mapping(
    fields: Mapping[Any, Any], classifier: SensitiveFields, ancestors: FrozenSet[int]
) -> Dict[Any, Any]:
    ancestors = ancestors | {id(fields)}
    result: Dict[Any, Any] = {}
    for key, value in fields.items():
        if classifier.is_sensitive(key):
            result[key] = REDACTED_VALUE
        else:
            result[key] = _mask_nested(value, classifier, ancestors)
    return result


def _mask_nested(
    value: Any, classifier: SensitiveFields, ancestors: FrozenSet[int]
) -> Any:
    if isinstance(value, (Mapping, list, tuple)) and id(value) in ancestors:
        return REDACTED_VALUE
    if isinstance(value, Mapping):
        return _mask_mapping(value, classifier, ancestors)
    if isinstance(value, (list, tuple)):
        return _mask_sequence(value, classifier, ancestors)
    return value


def _mask_sequence(
    items: Sequence[Any], classifier: SensitiveFields, ancestors: FrozenSet[int]
) -> Sequence[Any]:
    ancestors = ancestors | {id(items)}
    masked: List[Any] = [_mask_nested(item, classifier, ancestors) for item in items]
    if isinstance(items, tuple):
        return tuple(masked)
    return masked
