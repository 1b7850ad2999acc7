from typing import Annotated

from fastapi import Depends, Request

from voom.services.bookings import BookingService
from voom.services.catalog import CatalogService
from voom.services.supabase import SupabaseService


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


def get_booking_service(request: Request) -> BookingService:
    return request.app.state.booking_service


def get_supabase_service(request: Request) -> SupabaseService:
    return request.app.state.supabase_service


CatalogDep = Annotated[CatalogService, Depends(get_catalog_service)]
BookingDep = Annotated[BookingService, Depends(get_booking_service)]
SupabaseDep = Annotated[SupabaseService, Depends(get_supabase_service)]
