"""
Person registry API routes
All data access goes through the people service; routes only map results to HTTP.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from personnel.models.person import (
    PersonCreatedResponse, PersonDeletedResponse, PersonRecord, PersonRequest, PersonUpdatedResponse
)
from personnel.services.base_service import ServiceResult
from personnel.services.people_service import PeopleService, get_people_service

router = APIRouter()
logger = logging.getLogger(__name__)

def raise_for_result(result: ServiceResult):
    """Map a failed service result to the matching HTTP error"""
    if result.success:
        return
    if result.error_type in ("VALIDATION_FAILED", "DUPLICATE_KEY"):
        raise HTTPException(status_code=400, detail={"message": result.error, "errors": result.errors})
    if result.error_type == "NOT_FOUND":
        raise HTTPException(status_code=404, detail="Person not found")
    raise HTTPException(status_code=500, detail="Storage operation failed")

@router.post("", status_code=201, response_model=PersonCreatedResponse)
async def create_person(
    request: PersonRequest,
    people_service: PeopleService = Depends(get_people_service)
):
    """Register a new person"""
    result = await people_service.register_person(request.model_dump())
    raise_for_result(result)

    return {
        "message": "Person registered successfully",
        "id": result.data[0].id
    }

@router.get("", response_model=List[PersonRecord])
async def list_people(people_service: PeopleService = Depends(get_people_service)):
    """List every registered person, most recent first"""
    result = await people_service.list_people()
    raise_for_result(result)
    return result.data

@router.get("/{person_id}", response_model=PersonRecord)
async def get_person(
    person_id: int,
    people_service: PeopleService = Depends(get_people_service)
):
    """Get person details"""
    result = await people_service.get_person(person_id)
    raise_for_result(result)
    return result.data[0]

@router.put("/{person_id}", response_model=PersonUpdatedResponse)
async def update_person(
    person_id: int,
    request: PersonRequest,
    people_service: PeopleService = Depends(get_people_service)
):
    """Replace every field of a person"""
    result = await people_service.update_person(person_id, request.model_dump())
    raise_for_result(result)

    return {
        "message": "Person updated successfully",
        "record": result.data[0]
    }

@router.delete("/{person_id}", response_model=PersonDeletedResponse)
async def delete_person(
    person_id: int,
    people_service: PeopleService = Depends(get_people_service)
):
    """Delete a person permanently"""
    result = await people_service.delete_person(person_id)
    raise_for_result(result)

    return {
        "message": "Person deleted successfully",
        "deleted_id": person_id
    }
