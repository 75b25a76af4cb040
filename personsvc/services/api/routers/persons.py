# personsvc/services/api/routers/persons.py
from __future__ import annotations

import re
from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response
from pydantic import ValidationError as PayloadError

from personsvc.common.logging import get_logger
from personsvc.common.settings import get_settings
from personsvc.domain.errors import PersistenceError, PersonNotFound, ValidationError
from personsvc.domain.ports.person_store import PersonStorePort
from personsvc.services.api.deps import get_person_store
from personsvc.services.api.errors import WRONG_ID, payload_error_message
from personsvc.services.mappers.person import to_domain_from_request, to_read_schema
from personsvc.services.schemas.persons import ErrorRead, PersonRead, PersonRequest

cfg = get_settings()
logger = get_logger(__name__)
router = APIRouter(prefix=f"{cfg.api.prefix}/persons", tags=["persons"])

_ID_RE = re.compile(r"[+-]?[0-9]+")
_MAX_ID = 2**63 - 1

_ERRORS = {
    400: {"model": ErrorRead},
    500: {"model": ErrorRead},
}
_ERRORS_WITH_404 = {**_ERRORS, 404: {"model": ErrorRead}}

# the body is decoded by hand, so document it explicitly
_PERSON_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": PersonRequest.model_json_schema()}},
    }
}


# ---- helpers ----

def person_id_param(person_id: str = Path(..., description="Base-10 integer identifier")) -> int:
    if not _ID_RE.fullmatch(person_id):
        raise ValidationError(WRONG_ID)
    pid = int(person_id)
    if abs(pid) > _MAX_ID:
        raise ValidationError(WRONG_ID)
    return pid


async def person_payload(request: Request) -> PersonRequest:
    """
    Decode the raw body as JSON whatever its Content-Type header says.
    The id dependency is declared first on PATCH, so a bad id wins over a bad body.
    """
    body = await request.body()
    try:
        return PersonRequest.model_validate_json(body)
    except PayloadError as e:
        logger.error("bad person payload: %s", [(err.get("type"), err.get("loc")) for err in e.errors()])
        raise ValidationError(payload_error_message(e.errors())) from e


def _not_found(person_id: int) -> HTTPException:
    logger.warning("person with id = %d not found", person_id)
    return HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="person not found")


def _server_error(message: str, err: Exception) -> HTTPException:
    logger.error("%s: %s", message, err, exc_info=err)
    return HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=message)


# ---- routes ----

@router.post(
    "",
    status_code=HTTPStatus.CREATED,
    response_class=Response,
    responses=_ERRORS,
    openapi_extra=_PERSON_BODY,
)
def create_person(
    payload: PersonRequest = Depends(person_payload),
    store: PersonStorePort = Depends(get_person_store),
) -> Response:
    person = to_domain_from_request(payload)
    try:
        new_id = store.create(person)
    except PersistenceError as e:
        raise _server_error("creating person error", e) from e

    return Response(
        status_code=HTTPStatus.CREATED,
        headers={"Location": f"{cfg.api.prefix}/persons/{new_id}"},
    )


@router.patch("/{person_id}", response_model=PersonRead, responses=_ERRORS, openapi_extra=_PERSON_BODY)
def update_person(
    person_id: int = Depends(person_id_param),
    payload: PersonRequest = Depends(person_payload),
    store: PersonStorePort = Depends(get_person_store),
) -> PersonRead:
    person = to_domain_from_request(payload)
    try:
        person = store.update(person_id, person)
    except PersistenceError as e:
        # an unknown id is not told apart from other failures here
        raise _server_error("updating person error", e) from e

    return to_read_schema(person)


@router.delete(
    "/{person_id}",
    status_code=HTTPStatus.NO_CONTENT,
    response_class=Response,
    responses=_ERRORS_WITH_404,
)
def delete_person(
    person_id: int = Depends(person_id_param),
    store: PersonStorePort = Depends(get_person_store),
) -> Response:
    try:
        deleted = store.delete(person_id)
    except PersistenceError as e:
        raise _server_error("deleting person error", e) from e

    if not deleted:
        raise _not_found(person_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.get("/{person_id}", response_model=PersonRead, responses=_ERRORS_WITH_404)
def get_person(
    person_id: int = Depends(person_id_param),
    store: PersonStorePort = Depends(get_person_store),
) -> PersonRead:
    try:
        person = store.get_one(person_id)
    except PersonNotFound as e:
        raise _not_found(person_id) from e
    except PersistenceError as e:
        raise _server_error("getting person error", e) from e

    if not person.is_persisted():
        raise _not_found(person_id)
    return to_read_schema(person)


@router.get("", response_model=List[PersonRead], responses=_ERRORS)
def get_persons(store: PersonStorePort = Depends(get_person_store)) -> List[PersonRead]:
    try:
        persons = store.get_many()
    except PersistenceError as e:
        raise _server_error("getting persons error", e) from e

    return [to_read_schema(p) for p in persons]
