# app/api/routers/reference.py
from fastapi import APIRouter, Query

from app.api.envelope import envelope
from app.domain.exceptions import NotFoundError
from app.domain.reference import (
    COUNTRIES,
    DELIVERY_OPTIONS,
    DIETARY_OPTIONS,
    find_country,
    find_delivery_option,
)

router = APIRouter(prefix="/api", tags=["reference"])


@router.get("/delivery/options")
def delivery_options(type_: str | None = Query(None, alias="type")):
    if not type_:
        return envelope(200, "Delivery options retrieved successfully", DELIVERY_OPTIONS)

    option = find_delivery_option(type_)
    if option is None:
        raise NotFoundError(f"Delivery option '{type_}' not found")
    return envelope(200, "Delivery option retrieved successfully", option)


@router.get("/country")
def countries(
    id_: str | None = Query(None, alias="id"),
    country_id: str | None = Query(None, alias="countryId"),
):
    wanted = id_ or country_id
    if not wanted:
        return envelope(200, "Countries retrieved successfully", COUNTRIES)

    country = find_country(wanted)
    if country is None:
        raise NotFoundError(f"Country with ID {wanted} not found")
    return envelope(200, "Country retrieved successfully", country)


@router.get("/dietary")
def dietary_options():
    return envelope(200, "Dietary options retrieved successfully", DIETARY_OPTIONS)
