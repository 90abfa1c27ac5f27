import logging
from typing import Any, Callable

from fastapi import APIRouter, Body, Depends, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from config import Settings, get_settings
from database import InvalidIdentifierError
from models import ResourceKind
from schemas import Envelope
from services import ResourceService
from validation import ValidationFailure, decode

logger = logging.getLogger("boardgames.routes")


def respond(status_code: int, **fields: Any) -> JSONResponse:
    """Wrap fields in the response envelope, omitting the ones not passed."""
    envelope = Envelope(**fields)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(envelope, exclude_unset=True),
    )


def to_json(document: dict[str, Any]) -> dict[str, Any]:
    return {**document, "_id": str(document["_id"])}


def rejected(failure: ValidationFailure) -> JSONResponse:
    fields: dict[str, Any] = {"success": False, "message": failure.message}
    if failure.missing_fields:
        fields["missingFields"] = failure.missing_fields
    return respond(status.HTTP_400_BAD_REQUEST, **fields)


def invalid_id(kind: ResourceKind, exc: InvalidIdentifierError) -> JSONResponse:
    return respond(
        status.HTTP_400_BAD_REQUEST,
        success=False,
        message=f"Invalid {kind.label.lower()} id",
        error=str(exc),
    )


def not_found(kind: ResourceKind, **fields: Any) -> JSONResponse:
    return respond(status.HTTP_404_NOT_FOUND, success=False, message=f"{kind.label} not found", **fields)


def server_error(message: str, exc: Exception, settings: Settings) -> JSONResponse:
    logger.error("%s: %s", message, exc, exc_info=exc)
    return respond(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        success=False,
        message=message,
        error=str(exc) if settings.expose_errors else "Internal server error",
    )


def build_router(kind: ResourceKind, service_dependency: Callable[..., ResourceService]) -> APIRouter:
    """CRUD endpoints for one resource kind, mounted under /<collection>."""
    router = APIRouter(prefix=f"/{kind.collection}", tags=[kind.collection])
    noun = kind.label.lower()

    @router.get("")
    def list_resources(
        service: ResourceService = Depends(service_dependency),
        settings: Settings = Depends(get_settings),
    ):
        try:
            documents = service.get_all()
        except Exception as exc:
            return server_error(f"Error retrieving {kind.collection}", exc, settings)
        return respond(
            status.HTTP_200_OK,
            success=True,
            message=f"{kind.plural_label} retrieved successfully",
            count=len(documents),
            data=[to_json(d) for d in documents],
        )

    @router.get("/{doc_id}")
    def get_resource(
        doc_id: str,
        service: ResourceService = Depends(service_dependency),
        settings: Settings = Depends(get_settings),
    ):
        try:
            document = service.get_by_id(doc_id)
        except InvalidIdentifierError as exc:
            return invalid_id(kind, exc)
        except Exception as exc:
            return server_error(f"Error retrieving {noun}", exc, settings)
        if document is None:
            return not_found(kind, data=None)
        logger.info("Sent %s %r", noun, document.get(kind.display_field))
        return respond(
            status.HTTP_200_OK,
            success=True,
            message=f"{kind.label} retrieved successfully",
            data=to_json(document),
        )

    @router.post("")
    def create_resource(
        payload: dict = Body(...),
        service: ResourceService = Depends(service_dependency),
        settings: Settings = Depends(get_settings),
    ):
        try:
            record = decode(payload, kind)
        except ValidationFailure as failure:
            return rejected(failure)
        try:
            new_id = service.create(record)
        except Exception as exc:
            return server_error(f"Error creating {noun}", exc, settings)
        logger.info("Created %s %r with ID: %s", noun, payload.get(kind.display_field), new_id)
        return respond(
            status.HTTP_201_CREATED,
            success=True,
            message=f"{kind.label} created successfully",
            data={"id": new_id},
        )

    # PUT replaces every submitted field, so the full record is required again.
    @router.put("/{doc_id}")
    def update_resource(
        doc_id: str,
        payload: dict = Body(...),
        service: ResourceService = Depends(service_dependency),
        settings: Settings = Depends(get_settings),
    ):
        try:
            record = decode(payload, kind)
        except ValidationFailure as failure:
            return rejected(failure)
        try:
            counts = service.update(doc_id, record)
        except InvalidIdentifierError as exc:
            return invalid_id(kind, exc)
        except Exception as exc:
            return server_error(f"Error updating {noun}", exc, settings)
        if counts.matched == 0:
            return not_found(kind)
        logger.info("Updated %s with ID: %s", noun, doc_id)
        return respond(
            status.HTTP_200_OK,
            success=True,
            message=f"{kind.label} updated successfully",
            data={"id": doc_id, "modifiedCount": counts.modified},
        )

    @router.delete("/{doc_id}")
    def delete_resource(
        doc_id: str,
        service: ResourceService = Depends(service_dependency),
        settings: Settings = Depends(get_settings),
    ):
        try:
            deleted = service.delete(doc_id)
        except InvalidIdentifierError as exc:
            return invalid_id(kind, exc)
        except Exception as exc:
            return server_error(f"Error deleting {noun}", exc, settings)
        if deleted == 0:
            return not_found(kind)
        logger.info("Deleted %s with ID: %s", noun, doc_id)
        return respond(
            status.HTTP_200_OK,
            success=True,
            message=f"{kind.label} deleted successfully",
            data={"id": doc_id, "deletedCount": deleted},
        )

    return router
