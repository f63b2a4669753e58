from typing import List

from .records import InventoryFilter, ItemStatus, Record


class StatusSlice(Record):
    status: ItemStatus
    label: str
    count: int
    navigate: InventoryFilter


class AreaBar(Record):
    id: str
    name: str
    count: int
    navigate: InventoryFilter


class DashboardStats(Record):
    total: int
    service: int
    maintenance: int
    out_of_service: int
    by_status: List[StatusSlice]
    by_area: List[AreaBar]
    navigate_all: InventoryFilter = InventoryFilter()
