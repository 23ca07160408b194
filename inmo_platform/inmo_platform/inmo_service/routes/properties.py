"""
Property listing endpoints
"""
from fastapi import APIRouter, Depends, Response, status
import logging

from ..dependencies import RecordId, get_listing_service
from ..schemas import (
    ErrorResponse,
    PropertyCardListResponse,
    PropertyIn,
    PropertyListResponse,
    PropertyResponse,
)
from ..services import ListingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/properties", tags=["properties"])

ERROR_RESPONSES = {
    400: {"description": "Invalid request", "model": ErrorResponse},
    404: {"description": "Property not found", "model": ErrorResponse},
    500: {"description": "Internal server error", "model": ErrorResponse},
}


@router.get("", response_model=PropertyListResponse, responses=ERROR_RESPONSES)
def list_properties(service: ListingService = Depends(get_listing_service)):
    logger.info("list_properties endpoint called")
    properties = service.get_all_properties()
    return PropertyListResponse(
        data=properties,
        count=len(properties),
        message="Properties retrieved successfully"
    )


@router.get("/cards", response_model=PropertyCardListResponse, responses=ERROR_RESPONSES)
def list_property_cards(service: ListingService = Depends(get_listing_service)):
    cards = service.get_property_cards()
    return PropertyCardListResponse(data=cards, count=len(cards), message="Properties retrieved successfully")


@router.get("/{property_id}", response_model=PropertyResponse, responses=ERROR_RESPONSES)
def get_property(property_id: RecordId, service: ListingService = Depends(get_listing_service)):
    logger.info(f"get_property endpoint called with ID: {property_id}")
    prop = service.get_property_by_id(property_id)
    return PropertyResponse(data=prop, message="Property retrieved successfully")


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES
)
def create_property(prop: PropertyIn, service: ListingService = Depends(get_listing_service)):
    created = service.create_property(prop)
    return PropertyResponse(data=created, message="Property created successfully")


@router.put("/{property_id}", response_model=PropertyResponse, responses=ERROR_RESPONSES)
def update_property(
    property_id: RecordId,
    prop: PropertyIn,
    service: ListingService = Depends(get_listing_service)
):
    updated = service.update_property(property_id, prop)
    return PropertyResponse(data=updated, message="Property updated successfully")


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT, responses=ERROR_RESPONSES)
def delete_property(property_id: RecordId, service: ListingService = Depends(get_listing_service)):
    logger.info(f"delete_property endpoint called with ID: {property_id}")
    service.delete_property(property_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
