from uuid import uuid4

import pytest

from tenant_access.app.use_cases.scopes import CreateScopeUseCase
from tenant_access.domain.entities import Role


@pytest.mark.asyncio
async def test_create_scope_makes_creator_owner(mock_uow, clock):
    creator_id = uuid4()
    organizer = Role(id=uuid4(), name="ORGANIZER", display_name="Organizer", level=5)
    mock_uow.roles.get_by_name.return_value = organizer
    mock_uow.scopes.create.side_effect = lambda scope: scope

    result = await CreateScopeUseCase(mock_uow, clock).execute(creator_id, "  Acme Corp ")

    assert result.is_ok()
    assert result.value.name == "Acme Corp"
    assert result.value.role == "ORGANIZER"

    member = mock_uow.members.create.call_args[0][0]
    assert member.user_id == creator_id
    assert member.is_owner is True
    assert str(member.scope_id) == result.value.id

    grant = mock_uow.grants.get_or_create.call_args[0][0]
    assert grant.role_id == organizer.id
    assert str(grant.scope_id) == result.value.id
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_create_scope_without_seeded_role(mock_uow, clock):
    mock_uow.roles.get_by_name.return_value = None

    result = await CreateScopeUseCase(mock_uow, clock, owner_role_name="OWNER").execute(
        uuid4(), "Acme"
    )

    assert result.error.code == "ROLE_NOT_FOUND"
    mock_uow.scopes.create.assert_not_called()
