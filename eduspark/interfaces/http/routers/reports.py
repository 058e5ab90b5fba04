from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.encoders import jsonable_encoder

from ....application import reports
from ....infrastructure.cache import get_cache, set_cache
from ....infrastructure.db import Store, get_store, serialize, to_object_id
from ....infrastructure.metrics import cache_hits_total, cache_misses_total
from ..authz import verify_teacher
from ..schemas import ClassTotals, CountResp, SiteStats

router = APIRouter(tags=["reports"])


def _cached(key: str, compute):
    cached = get_cache(key)
    if cached is not None:
        cache_hits_total.inc()
        return cached
    cache_misses_total.inc()
    result = jsonable_encoder(serialize(compute()))
    set_cache(key, result)
    return result


@router.get("/site_stats", response_model=SiteStats)
def site_stats(store: Store = Depends(get_store)):
    return _cached("reports:site_totals", lambda: reports.site_totals(store))


@router.get("/popular_classes")
def popular_classes(store: Store = Depends(get_store)):
    return _cached("reports:popular_classes", lambda: reports.popular_classes(store))


@router.get("/total_classes_data/{class_id}", response_model=ClassTotals, dependencies=[Depends(verify_teacher)])
def total_classes_data(class_id: str, store: Store = Depends(get_store)):
    totals = reports.class_totals(store, to_object_id(class_id))
    if totals is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "class not found")
    return totals


@router.get("/per_day_assignment_submissions/{class_id}", response_model=CountResp,
            dependencies=[Depends(verify_teacher)])
def per_day_assignment_submissions(class_id: str, store: Store = Depends(get_store)):
    return CountResp(count=reports.per_day_submissions(store, class_id))
