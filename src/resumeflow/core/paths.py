from __future__ import annotations

PDF_SUFFIX = ".pdf"


def normalize_pdf_path(path: str) -> str:
    """Return ``path`` ending in exactly one ``.pdf``.

    Repeated trailing ``.pdf.pdf`` suffixes collapse to one and a missing
    suffix is appended. Matching is case-sensitive.
    """
    while path.endswith(PDF_SUFFIX + PDF_SUFFIX):
        path = path[: -len(PDF_SUFFIX)]
    if not path.endswith(PDF_SUFFIX):
        path = path + PDF_SUFFIX
    return path


def normalize_optional_path(path: str | None) -> str | None:
    if path is None:
        return None
    return normalize_pdf_path(path)
