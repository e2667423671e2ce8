from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr
from typing import Any, List, Mapping, Optional, Union


# A raw request value: an integer, an unparsed string, or absent
PageInput = Optional[Union[StrictInt, StrictStr]]


def _supported(value: Any) -> bool:
    return isinstance(value, (int, str)) and not isinstance(value, bool)


class PageParams(BaseModel):
    """
    Raw pagination parameters as received from a request.

    Values are kept as given; normalization happens in the resolver so that
    bad input silently falls back to defaults instead of failing validation.
    """

    page: PageInput = None
    per_page: PageInput = None
    total: PageInput = None
    per_group: PageInput = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_mapping(cls, params: Optional[Mapping[str, Any]]) -> "PageParams":
        """
        Build params from a loosely typed mapping (query string, JSON body...).

        Unknown keys are ignored. Values of unsupported types count as absent
        for page, per_page and per_group, and as an invalid (zero) total.
        """
        params = params or {}
        values: dict[str, Any] = {}
        for key in ("page", "per_page", "per_group"):
            value = params.get(key)
            values[key] = value if _supported(value) else None

        total = params.get("total")
        if total is None or _supported(total):
            values["total"] = total
        else:
            values["total"] = 0

        return cls(**values)


class PageResponse(BaseModel):
    """Serializable view of a Page; the query is never exposed."""

    entries: List[Any]
    total_entries: int
    page_number: int
    per_page: int
    pages: int

    model_config = ConfigDict(from_attributes=True)
