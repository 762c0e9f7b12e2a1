from pydantic import BaseModel, Field


class DocumentPermissions(BaseModel):
    """Capabilities a PDF grants to its user.

    Capabilities that the reader cannot report are left as None and count
    as unrestricted.

    Attributes:
        allows_copying: Text and graphics may be extracted.
        allows_printing: The document may be printed.
        allows_changes: The document may be modified.
        allows_assembly: Pages may be inserted, rotated or deleted.
        allows_commenting: Annotations may be added or modified.
    """

    allows_copying: bool = True
    allows_printing: bool = True
    allows_changes: bool | None = None
    allows_assembly: bool | None = None
    allows_commenting: bool | None = None

    def restrictions(self) -> list[str]:
        """Return the restricted capabilities in reporting order."""
        restricted: list[str] = []
        if not self.allows_copying:
            restricted.append("copying")
        if not self.allows_printing:
            restricted.append("printing")
        if self.allows_changes is False or self.allows_assembly is False:
            restricted.append("changes")
        if self.allows_commenting is False:
            restricted.append("comments")
        return restricted


class ProcessResult(BaseModel):
    """Outcome of processing one document.

    Attributes:
        total_matches: Pattern matches counted in the document.
        stopped: Whether scanning stopped at the first match.
        page_counts: Matches per page, for pages counted individually.
        pages_visited: Pages whose text was extracted.
    """

    total_matches: int = Field(default=0, ge=0)
    stopped: bool = False
    page_counts: dict[int, int] = Field(default_factory=dict)
    pages_visited: int = Field(default=0, ge=0)
