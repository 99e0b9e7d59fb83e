from uuid import uuid4

import pytest

from tenant_access.app.use_cases.bootstrap import SeedCatalogUseCase
from tenant_access.domain.catalog import DEFAULT_PERMISSIONS, DEFAULT_ROLES


def _assign_id(entity):
    entity.id = uuid4()
    return entity


@pytest.mark.asyncio
async def test_seed_empty_catalog(mock_uow):
    mock_uow.permissions.get_by_name.return_value = None
    mock_uow.permissions.create.side_effect = _assign_id
    mock_uow.roles.get_by_name.return_value = None
    mock_uow.roles.create.side_effect = _assign_id
    mock_uow.roles.attach_permission.return_value = True

    result = await SeedCatalogUseCase(mock_uow).execute()

    assert result.is_ok()
    seeded = result.value
    assert seeded.permissions_created == len(DEFAULT_PERMISSIONS)
    assert seeded.roles_created == len(DEFAULT_ROLES)

    # SUPER_ADMIN expands "*" to the whole catalog
    explicit_links = sum(
        len(names) for name, (_, _, _, names) in DEFAULT_ROLES.items() if name != "SUPER_ADMIN"
    )
    assert seeded.links_created == explicit_links + len(DEFAULT_PERMISSIONS)

    levels = {
        call.args[0].name: call.args[0].level for call in mock_uow.roles.create.call_args_list
    }
    assert levels == {
        "SUPER_ADMIN": 1,
        "ADMIN": 2,
        "SUPPORT": 3,
        "ORGANIZER": 5,
        "PARTICIPANT": 10,
    }
    assert all(call.args[0].is_system_role for call in mock_uow.roles.create.call_args_list)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_seed_is_idempotent(mock_uow):
    mock_uow.permissions.get_by_name.side_effect = lambda name: _assign_id(
        type("Stub", (), {"name": name})()
    )
    mock_uow.roles.get_by_name.side_effect = lambda name: _assign_id(
        type("Stub", (), {"name": name})()
    )
    mock_uow.roles.attach_permission.return_value = False

    result = await SeedCatalogUseCase(mock_uow).execute()

    assert result.value.permissions_created == 0
    assert result.value.roles_created == 0
    assert result.value.links_created == 0
    mock_uow.permissions.create.assert_not_called()
    mock_uow.roles.create.assert_not_called()


@pytest.mark.asyncio
async def test_seed_skips_unknown_permission_names(mock_uow):
    mock_uow.permissions.get_by_name.return_value = None
    mock_uow.permissions.create.side_effect = _assign_id
    mock_uow.roles.get_by_name.return_value = None
    mock_uow.roles.create.side_effect = _assign_id
    mock_uow.roles.attach_permission.return_value = True

    use_case = SeedCatalogUseCase(
        mock_uow,
        permissions=[("session", "read", "View Sessions", "")],
        roles={"VIEWER": ("Viewer", "", 9, ["session.read", "session.fly"])},
    )
    result = await use_case.execute()

    assert result.value.links_created == 1
