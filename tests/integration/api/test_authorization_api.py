from uuid import UUID

import pytest
import pytest_asyncio
from httpx import AsyncClient

from tenant_access.app.services.grant_ledger import GrantLedger
from tenant_access.app.services.role_store import RoleStore


async def grant_directly(uow, clock, user, role_name, scope_id=None):
    role = (await RoleStore(uow).find_by_name(role_name)).value
    result = await GrantLedger(uow, clock).grant(user.id, role.id, scope_id)
    assert result.is_ok()


@pytest_asyncio.fixture
async def admin(seeded, make_user, uow, clock):
    user = await make_user("admin@example.com", "Ada", "Admin")
    await grant_directly(uow, clock, user, "ADMIN")
    return user


@pytest.mark.asyncio
async def test_permission_catalog_is_ordered(client: AsyncClient, seeded, make_user, auth_headers):
    user = await make_user("reader@example.com")

    response = await client.get("/permissions", headers=auth_headers(user))

    assert response.status_code == 200
    names = [p["name"] for p in response.json()]
    assert len(names) == 18
    assert names[:2] == ["feature.manage", "invitation.manage"]
    assert names[-1] == "user.update"


@pytest.mark.asyncio
async def test_user_without_grants_has_no_permissions(
    client: AsyncClient, seeded, make_user, auth_headers
):
    user = await make_user("nobody@example.com")

    permissions = await client.get("/me/permissions", headers=auth_headers(user))
    check = await client.get(
        "/me/permissions/check", params={"name": "user.read"}, headers=auth_headers(user)
    )

    assert permissions.json() == []
    assert check.json() == {"permission": "user.read", "allowed": False}


@pytest.mark.asyncio
async def test_admin_grants_and_revokes_role(
    client: AsyncClient, admin, make_user, auth_headers
):
    target = await make_user("target@example.com")

    granted = await client.post(
        "/grants",
        json={"user_id": str(target.id), "role": "SUPPORT"},
        headers=auth_headers(admin),
    )
    assert granted.status_code == 201
    assert granted.json()["role"] == "SUPPORT"
    assert granted.json()["scope_id"] is None

    # Same triple again returns the same grant
    repeated = await client.post(
        "/grants",
        json={"user_id": str(target.id), "role": "SUPPORT"},
        headers=auth_headers(admin),
    )
    assert repeated.json()["id"] == granted.json()["id"]

    roles = await client.get("/me/roles", params={"platform": True}, headers=auth_headers(target))
    assert [r["name"] for r in roles.json()] == ["SUPPORT"]

    revoked = await client.delete(
        "/grants",
        params={"user_id": str(target.id), "role": "SUPPORT"},
        headers=auth_headers(admin),
    )
    assert revoked.json() == {"revoked": True}

    again = await client.delete(
        "/grants",
        params={"user_id": str(target.id), "role": "SUPPORT"},
        headers=auth_headers(admin),
    )
    assert again.status_code == 200
    assert again.json() == {"revoked": False}

    check = await client.get(
        "/me/permissions/check", params={"name": "user.read"}, headers=auth_headers(target)
    )
    assert check.json()["allowed"] is False


@pytest.mark.asyncio
async def test_scoped_grant_is_invisible_to_other_scopes(
    client: AsyncClient, admin, make_user, auth_headers, uow, clock
):
    target = await make_user("target@example.com")
    scope_id = "7b0c4a52-61f4-4a8e-9d51-0f0e3b6f1a10"
    other_scope_id = "0d9b8f7e-2c1a-4b3d-8e6f-5a4b3c2d1e0f"
    await grant_directly(uow, clock, admin, "ADMIN", UUID(scope_id))

    granted = await client.post(
        "/grants",
        json={"user_id": str(target.id), "role": "ORGANIZER", "scope_id": scope_id},
        headers=auth_headers(admin),
    )
    assert granted.status_code == 201

    in_scope = await client.get(
        "/me/permissions/check",
        params={"name": "session.create", "scope_id": scope_id},
        headers=auth_headers(target),
    )
    elsewhere = await client.get(
        "/me/permissions/check",
        params={"name": "session.create", "scope_id": other_scope_id},
        headers=auth_headers(target),
    )
    anywhere = await client.get(
        "/me/permissions/check",
        params={"name": "session.create"},
        headers=auth_headers(target),
    )

    assert in_scope.json()["allowed"] is True
    assert elsewhere.json()["allowed"] is False
    assert anywhere.json()["allowed"] is True


@pytest.mark.asyncio
async def test_grant_requires_user_update_permission(
    client: AsyncClient, seeded, make_user, auth_headers
):
    caller = await make_user("caller@example.com")

    response = await client.post(
        "/grants",
        json={"user_id": str(caller.id), "role": "SUPER_ADMIN"},
        headers=auth_headers(caller),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "PERMISSION_DENIED"


@pytest.mark.asyncio
async def test_grant_unknown_role(client: AsyncClient, admin, auth_headers):
    response = await client.post(
        "/grants",
        json={"user_id": str(admin.id), "role": "WIZARD"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ROLE_NOT_FOUND"


@pytest.mark.asyncio
async def test_scope_owner_cannot_escalate_to_platform_super_admin(
    client: AsyncClient, seeded, make_user, auth_headers, uow, clock
):
    mallory = await make_user("mallory@example.com", "Mal", "Lory")
    sock = await make_user("sock@example.com", "Sock", "Puppet")
    created = await client.post("/scopes", json={"name": "Side Door"}, headers=auth_headers(mallory))
    scope_id = created.json()["id"]

    invited = await client.post(
        f"/scopes/{scope_id}/invitations",
        json={"email": "sock@example.com", "role": "SUPER_ADMIN"},
        headers=auth_headers(mallory),
    )
    assert invited.status_code == 403
    assert invited.json()["error"]["code"] == "ROLE_ABOVE_CALLER"

    # Even a SUPER_ADMIN held only inside a scope carries no platform authority
    await grant_directly(uow, clock, sock, "SUPER_ADMIN", UUID(scope_id))
    escalated = await client.post(
        "/grants",
        json={"user_id": str(mallory.id), "role": "SUPER_ADMIN"},
        headers=auth_headers(sock),
    )
    assert escalated.status_code == 403
    assert escalated.json()["error"]["code"] == "PERMISSION_DENIED"

    roles = await client.get("/me/roles", params={"platform": True}, headers=auth_headers(mallory))
    assert roles.json() == []


@pytest.mark.asyncio
async def test_scoped_authority_grants_within_its_scope(
    client: AsyncClient, seeded, make_user, auth_headers, uow, clock
):
    scoped_admin = await make_user("scoped@example.com")
    target = await make_user("target@example.com")
    scope_id = "7b0c4a52-61f4-4a8e-9d51-0f0e3b6f1a10"
    await grant_directly(uow, clock, scoped_admin, "ADMIN", UUID(scope_id))

    granted = await client.post(
        "/grants",
        json={"user_id": str(target.id), "role": "SUPPORT", "scope_id": scope_id},
        headers=auth_headers(scoped_admin),
    )
    assert granted.status_code == 201
    assert granted.json()["scope_id"] == scope_id

    platform = await client.post(
        "/grants",
        json={"user_id": str(target.id), "role": "SUPPORT"},
        headers=auth_headers(scoped_admin),
    )
    assert platform.status_code == 403
    assert platform.json()["error"]["code"] == "PERMISSION_DENIED"


@pytest.mark.asyncio
async def test_admin_cannot_grant_role_above_own(
    client: AsyncClient, admin, make_user, auth_headers
):
    target = await make_user("target@example.com")

    response = await client.post(
        "/grants",
        json={"user_id": str(target.id), "role": "SUPER_ADMIN"},
        headers=auth_headers(admin),
    )
    revoke = await client.delete(
        "/grants",
        params={"user_id": str(target.id), "role": "SUPER_ADMIN"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "ROLE_ABOVE_CALLER"
    assert revoke.status_code == 403

    roles = await client.get("/me/roles", headers=auth_headers(target))
    assert roles.json() == []
