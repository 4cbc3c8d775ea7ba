import re
from dataclasses import dataclass
from typing import Mapping, Optional, Union

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class SignatureInfo:
    homeowner_name: str
    contractor_name: str


def build_centered_name_line(
    name: Optional[str], total_length: int = 32, min_padding: int = 3
) -> str:
    """
    Center `name` (whitespace removed) in a run of underscores.

    Blank names yield a plain underscore line of `total_length`. Names that
    cannot keep `min_padding` underscores on both sides fall back to
    `___name___` regardless of the requested sizes.
    """
    compact = _WHITESPACE.sub("", name or "")
    if not compact:
        return "_" * total_length

    fallback = f"___{compact}___"
    if len(compact) > total_length - 2 * min_padding:
        return fallback

    available = total_length - len(compact)
    left = available // 2
    right = available - left
    if left < min_padding or right < min_padding:
        return fallback

    return "_" * left + compact + "_" * right


def _names(signatures: Union[SignatureInfo, Mapping[str, Optional[str]]]):
    if isinstance(signatures, SignatureInfo):
        return signatures.homeowner_name, signatures.contractor_name
    return signatures.get("homeownerName"), signatures.get("contractorName")


def append_signatures_section(
    contract_text: str, signatures: Union[SignatureInfo, Mapping[str, Optional[str]]]
) -> str:
    homeowner_name, contractor_name = _names(signatures)
    lines = [
        contract_text.rstrip(),
        "",
        "Signatures",
        "",
        build_centered_name_line(homeowner_name),
        "Homeowner Printed Name",
        "",
        build_centered_name_line(contractor_name),
        "Contractor Printed Name",
    ]
    return "\n".join(lines)
