"""
Keeps the spouse link between clients symmetric.

Planning is pure: given the records involved, ``plan_create_links`` and
``plan_update_links`` return the ordered writes needed. ``SpouseLinkMaintainer``
reads what the plan needs, then issues the writes one after another, stale-link
clears first and the acting client's own patch last.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, UTC
from uuid import UUID

from src.app.core.domain.models import Client, ClientPatch, ClientStatus
from src.app.core.services.client_store import ClientStore
from src.shared.exceptions import DomainValidationError, EntityNotFound

logger = logging.getLogger(__name__)

MARITAL_FIELDS = ("marital_status", "property_regime", "wedding_date")


@dataclass
class SpouseLinkPlan:
    """Writes to issue for one operation: spouse-side patches in order, then the client's own patch."""
    spouse_patches: list[tuple[UUID, ClientPatch]] = field(default_factory=list)
    client_patch: ClientPatch = field(default_factory=ClientPatch)


def _clear_link(now: datetime) -> ClientPatch:
    return ClientPatch(spouse_id=None, updated_at=now)


def _marital_values(current: Client, patch: ClientPatch) -> dict:
    # an empty patch value falls back to what the acting client already has
    return {name: getattr(patch, name) or getattr(current, name) for name in MARITAL_FIELDS}


def plan_create_links(client: Client, spouse: Client, now: datetime) -> list[tuple[UUID, ClientPatch]]:
    """Spouse-side writes that follow inserting ``client`` paired with ``spouse``."""
    patches = []
    if spouse.spouse_id is not None and spouse.spouse_id != client.id:
        patches.append((spouse.spouse_id, _clear_link(now)))
    patches.append((
        spouse.id,
        ClientPatch(
            spouse_id=client.id,
            marital_status=client.marital_status,
            property_regime=client.property_regime,
            updated_at=now,
        ),
    ))
    return patches


def plan_update_links(
    current: Client,
    patch: ClientPatch,
    now: datetime,
    remove_spouse: bool = False,
    new_spouse: Client | None = None,
) -> SpouseLinkPlan:
    """
    Decide the spouse-side writes for an update of ``current``.

    Branches are exclusive and tried in order: remove the spouse, assign
    ``new_spouse``, or push changed marital fields onto the existing spouse.
    ``new_spouse`` is the already loaded record the patch points at, or None
    when the patch does not request a different spouse.
    """
    if remove_spouse and current.spouse_id is not None:
        return SpouseLinkPlan(
            spouse_patches=[(current.spouse_id, _clear_link(now))],
            client_patch=patch.merged(spouse_id=None),
        )

    if new_spouse is not None and new_spouse.id != current.spouse_id:
        patches = []
        if current.spouse_id is not None:
            patches.append((current.spouse_id, _clear_link(now)))
        third_party = new_spouse.spouse_id
        if third_party is not None and third_party not in (current.id, current.spouse_id):
            patches.append((third_party, _clear_link(now)))
        patches.append((
            new_spouse.id,
            ClientPatch(spouse_id=current.id, updated_at=now, **_marital_values(current, patch)),
        ))
        return SpouseLinkPlan(spouse_patches=patches, client_patch=patch)

    if current.spouse_id is not None and any(getattr(patch, name) for name in MARITAL_FIELDS):
        return SpouseLinkPlan(
            spouse_patches=[
                (current.spouse_id, ClientPatch(updated_at=now, **_marital_values(current, patch)))
            ],
            client_patch=patch,
        )

    return SpouseLinkPlan(client_patch=patch)


class SpouseLinkMaintainer:
    """Creates, updates and soft-deletes clients while keeping spouse links symmetric."""

    def __init__(self, store: ClientStore):
        self.store = store

    async def create(self, client: Client) -> UUID:
        """
        Insert ``client`` and, when it names a spouse, pair the spouse back.

        A spouse that does not exist is dropped from the new record so that no
        one-sided link is stored.

        Raises:
            DomainValidationError: If the client names itself as spouse
        """
        spouse = None
        if client.spouse_id is not None:
            if client.spouse_id == client.id:
                raise DomainValidationError("A client cannot be their own spouse")
            spouse = await self.store.get(client.spouse_id)
            if spouse is None:
                logger.warning(
                    "Spouse %s of new client %s not found, creating without spouse",
                    client.spouse_id, client.id,
                )
                client = client.model_copy(update={"spouse_id": None})

        await self.store.insert(client)

        if spouse is not None:
            for spouse_side_id, spouse_patch in plan_create_links(client, spouse, datetime.now(UTC)):
                await self._apply_to_spouse_side(spouse_side_id, spouse_patch)
            logger.info("Paired new client %s with spouse %s", client.id, spouse.id)

        return client.id

    async def update(self, client_id: UUID, patch: ClientPatch, remove_spouse: bool = False) -> UUID:
        """
        Apply ``patch`` to a client, repairing spouse links first.

        Raises:
            EntityNotFound: If the client does not exist; nothing is written
            DomainValidationError: If the patch names the client as its own spouse
        """
        current = await self.store.get(client_id)
        if current is None:
            raise EntityNotFound("Client", client_id)

        if patch.sets("spouse_id") and patch.spouse_id is None:
            remove_spouse = True
            patch = patch.without("spouse_id")
        if patch.spouse_id == client_id:
            raise DomainValidationError("A client cannot be their own spouse")

        new_spouse = None
        removing = remove_spouse and current.spouse_id is not None
        if not removing and patch.spouse_id is not None and patch.spouse_id != current.spouse_id:
            new_spouse = await self.store.get(patch.spouse_id)
            if new_spouse is None:
                logger.warning(
                    "Spouse %s requested for client %s not found, keeping current link",
                    patch.spouse_id, client_id,
                )
                patch = patch.without("spouse_id")

        now = datetime.now(UTC)
        plan = plan_update_links(current, patch, now, remove_spouse=remove_spouse, new_spouse=new_spouse)
        for spouse_side_id, spouse_patch in plan.spouse_patches:
            await self._apply_to_spouse_side(spouse_side_id, spouse_patch)

        if not await self.store.patch(client_id, plan.client_patch.merged(updated_at=now)):
            raise EntityNotFound("Client", client_id)
        return client_id

    async def soft_delete(self, client_id: UUID) -> UUID:
        """Mark the client inactive. Spouse links are left as they are on both records."""
        patch = ClientPatch(status=ClientStatus.INACTIVE, updated_at=datetime.now(UTC))
        if not await self.store.patch(client_id, patch):
            raise EntityNotFound("Client", client_id)
        return client_id

    async def _apply_to_spouse_side(self, client_id: UUID, patch: ClientPatch) -> None:
        if await self.store.patch(client_id, patch):
            logger.info("Updated spouse link on client %s", client_id)
        else:
            logger.warning("Skipped spouse link repair, client %s not found", client_id)
