from __future__ import annotations


class ArchiveError(RuntimeError):
    pass


class NoValidDateError(ArchiveError):
    def __init__(self, bill_version_id: str, *, had_primary: bool):
        self.bill_version_id = bill_version_id
        self.had_primary = had_primary
        if had_primary:
            msg = f"Had MODS data but no date available for {bill_version_id}, SKIPPING"
        else:
            msg = f"Neither MODS data nor Govtrack's Dublin Core date available for {bill_version_id}, SKIPPING"
        super().__init__(msg)


class NoVersionsError(ArchiveError):
    pass


class BillNotFoundError(ArchiveError):
    pass
