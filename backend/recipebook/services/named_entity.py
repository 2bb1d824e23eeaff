"""
RecipeBook Backend: Named Entity Service Base
==============================================

What:  Shared create/list/get/update/delete logic for entities identified by
       a unique, case-insensitive name (categories and ingredients).
How:   Subclasses set `resource` and pass their repository; the base class
       trims names, rejects empty ones and enforces uniqueness against the
       repository's normalized-name lookup.
Who:   CategoryService and IngredientService.

Uniqueness rules:
    - Names are compared trimmed and lowercased ("  Sugar " == "sugar").
    - On rename, the record's own id is excluded, so renaming a record to
      its current name (in any casing) never conflicts with itself.
"""

import logging
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

from recipebook.exceptions import ConflictError, NotFoundError, ValidationError

EntityT = TypeVar("EntityT", bound=BaseModel)
CreateT = TypeVar("CreateT", bound=BaseModel)
UpdateT = TypeVar("UpdateT", bound=BaseModel)

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 200


def require_name(name: Optional[str]) -> str:
    """
    Trim a submitted name and make sure something is left.

    Raises:
        ValidationError: name is missing, blank after trimming, or longer
            than MAX_NAME_LENGTH characters
    """
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError(message="Name is required", field="name")
    if len(cleaned) > MAX_NAME_LENGTH:
        raise ValidationError(
            message=f"Name must be at most {MAX_NAME_LENGTH} characters",
            field="name",
        )
    return cleaned


class NamedEntityService(Generic[EntityT, CreateT, UpdateT]):
    """
    Base service for uniquely named entities.

    Parameterized by the entity, create and update schemas; subclasses
    such as `NamedEntityService[Category, CategoryCreate, CategoryUpdate]`
    get precise types without overriding anything.

    The repository must provide list, find_by_id, find_by_name, create,
    update and delete with the semantics documented in
    `recipebook.repositories.base`.
    """

    resource = "record"

    def __init__(self, repository):
        self.repository = repository

    async def create(self, data: CreateT) -> EntityT:
        name = require_name(data.name)
        await self._ensure_unique(name)
        entity = await self.repository.create(data.model_copy(update={"name": name}))
        logger.info("Created %s %s (%s)", self.resource, entity.id, entity.name)
        return entity

    async def list(self) -> List[EntityT]:
        return await self.repository.list()

    async def get(self, entity_id: str) -> EntityT:
        found = await self.repository.find_by_id(entity_id)
        if found is None:
            raise NotFoundError(resource=self.resource, resource_id=entity_id)
        return found

    async def update(self, entity_id: str, data: UpdateT) -> EntityT:
        """
        Apply a partial patch.

        Only a provided, non-null `name` is validated and checked for
        uniqueness; an empty patch returns the stored record unchanged.

        Raises:
            ValidationError: provided name is blank
            ConflictError: another record already uses the name
            NotFoundError: no record with this id
        """
        if "name" in data.model_fields_set and data.name is not None:
            name = require_name(data.name)
            await self._ensure_unique(name, exclude_id=entity_id)
            data = data.model_copy(update={"name": name})
        return await self.repository.update(entity_id, data)

    async def delete(self, entity_id: str) -> None:
        await self.repository.delete(entity_id)
        logger.info("Deleted %s %s", self.resource, entity_id)

    async def _ensure_unique(self, name: str, exclude_id: Optional[str] = None) -> None:
        existing = await self.repository.find_by_name(name)
        if existing is not None and existing.id != exclude_id:
            logger.warning("Rejected duplicate %s name '%s'", self.resource, name)
            raise ConflictError(
                message=f"{self.resource.capitalize()} name must be unique",
                context={"name": name, "existing_id": existing.id},
            )
