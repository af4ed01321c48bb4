from bill_text_core.repositories.bills import BillRepository
from bill_text_core.repositories.versions import BillVersionRepository

__all__ = [
    "BillRepository",
    "BillVersionRepository",
]
