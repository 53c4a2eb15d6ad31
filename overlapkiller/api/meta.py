"""

Functions for reading the unstructured JSON objects returned by the API server.

Only the fields the overlap check needs are exposed. Missing or null fields read as
empty strings so that a half-populated object (e.g. a pending pod) is still usable.

"""


def extract_list(obj):
    if not isinstance(obj, dict):
        raise TypeError(f"expected a list object, got {type(obj).__name__}")
    items = obj.get("items")
    if items is None:
        return []
    if not isinstance(items, list):
        raise TypeError(f"expected items to be a list, got {type(items).__name__}")
    return items


def accessor(obj):
    return _Accessor(obj)


class _Accessor:
    def __init__(self, obj):
        self._obj = obj
        self._metadata = obj["metadata"]
        if not isinstance(self._metadata, dict):
            raise TypeError("metadata is not an object")

    @property
    def namespace(self):
        return self._metadata.get("namespace") or ""

    @property
    def name(self):
        return self._metadata.get("name") or ""

    @property
    def cluster_ip(self):
        return _field(self._obj, "spec", "clusterIP")

    @property
    def pod_ip(self):
        return _field(self._obj, "status", "podIP")


def _field(obj, section, key):
    value = obj.get(section) or {}
    if not isinstance(value, dict):
        raise TypeError(f"{section} is not an object")
    return value.get(key) or ""
