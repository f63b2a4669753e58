from ..schemas.dashboard import AreaBar, DashboardStats, StatusSlice
from ..schemas.records import InventoryFilter, ItemStatus
from ..storage.gateway import PersistenceGateway


def compute_stats(gateway: PersistenceGateway) -> DashboardStats:
    items = gateway.get_items()
    areas = gateway.get_areas()

    counts = {status: 0 for status in ItemStatus}
    for item in items:
        counts[item.status] += 1

    by_area = [
        AreaBar(
            id=area.id,
            name=area.name,
            count=sum(1 for i in items if i.area_id == area.id),
            navigate=InventoryFilter(area_id=area.id),
        )
        for area in areas
    ]
    by_status = [
        StatusSlice(status=status, label=status.label, count=counts[status], navigate=InventoryFilter(status=status))
        for status in ItemStatus
    ]
    return DashboardStats(
        total=len(items),
        service=counts[ItemStatus.SERVICE],
        maintenance=counts[ItemStatus.MAINTENANCE],
        out_of_service=counts[ItemStatus.OUT_OF_SERVICE],
        by_status=by_status,
        by_area=by_area,
    )
