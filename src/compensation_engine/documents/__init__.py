"""Generated documents."""

from compensation_engine.documents.annexure import (
    AnnexureDocument,
    StatementExtras,
    StatementRenderer,
    build_annexure,
)

__all__ = ["AnnexureDocument", "StatementExtras", "StatementRenderer", "build_annexure"]
