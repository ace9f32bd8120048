from app import models
from app.services.security import effective_permissions, has_any_role, has_permission


def test_effective_permissions_union_direct_and_group_roles(db_session, seeded):
    user_role = seeded.query(models.Role).filter_by(name="USER").one()
    admin_role = seeded.query(models.Role).filter_by(name="ADMIN").one()
    group = models.Group(name="Managers", roles=[admin_role])
    user = models.User(
        username="manager",
        email="manager@example.com",
        hashed_password="x",
        roles=[user_role],
        groups=[group],
    )
    seeded.add_all([group, user])
    seeded.commit()

    assert effective_permissions(user) == {"user:read", "user:write", "user:delete"}
    assert has_permission(user, "user:delete")
    assert has_any_role(user, ["SOMETHING_ELSE"])


def test_user_without_roles_has_no_permissions(db_session):
    user = models.User(username="nobody", email="nobody@example.com", hashed_password="x")
    db_session.add(user)
    db_session.commit()
    assert effective_permissions(user) == set()
    assert not has_any_role(user, ["USER"])


def test_admin_only_endpoints_are_forbidden_to_plain_users(client, user_headers):
    r = client.get("/api/roles", headers=user_headers)
    assert r.status_code == 403
    assert r.json()["errorCode"] == "ACCESS_DENIED"
    assert client.get("/api/audit-logs", headers=user_headers).status_code == 403


def test_plain_users_can_read_reference_data(client, user_headers):
    r = client.get("/api/currencies", headers=user_headers)
    assert r.status_code == 200
    assert r.json()["total_elements"] == 0


def test_group_membership_grants_admin_access(client, seeded, admin_headers, user_headers):
    admin_role = seeded.query(models.Role).filter_by(name="ADMIN").one()
    group = client.post(
        "/api/groups", json={"name": "Ops", "role_ids": [admin_role.id]}, headers=admin_headers
    )
    assert group.status_code == 201
    assert group.json()["role_ids"] == [admin_role.id]

    me = client.get("/api/users/me", headers=user_headers).json()
    r = client.post(f"/api/users/{me['id']}/groups/{group.json()['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["group_ids"] == [group.json()["id"]]

    assert client.get("/api/roles", headers=user_headers).status_code == 200
    perms = client.get(f"/api/users/{me['id']}/permissions", headers=user_headers).json()
    assert perms == ["user:delete", "user:read", "user:write"]


def test_users_cannot_read_or_escalate_other_accounts(client, seeded, admin_headers, user_headers):
    me = client.get("/api/users/me", headers=user_headers).json()
    admin = seeded.query(models.User).filter_by(username="admin").one()

    assert client.get(f"/api/users/{admin.id}", headers=user_headers).status_code == 403
    assert client.get(f"/api/users/{me['id']}", headers=user_headers).status_code == 200

    escalate = client.patch(
        f"/api/users/{me['id']}", json={"role_ids": [1]}, headers=user_headers
    )
    assert escalate.status_code == 403

    renamed = client.patch(
        f"/api/users/{me['id']}", json={"email": "new@example.com"}, headers=user_headers
    )
    assert renamed.status_code == 200
    assert renamed.json()["email"] == "new@example.com"


def test_role_in_use_cannot_be_deleted(client, seeded, admin_headers):
    admin_role = seeded.query(models.Role).filter_by(name="ADMIN").one()
    r = client.delete(f"/api/roles/{admin_role.id}", headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["errorCode"] == "DEPENDENTS_EXIST"


def test_admin_creates_user_with_hashed_password(client, seeded, admin_headers):
    r = client.post(
        "/api/users",
        json={"username": "clerk", "email": "clerk@example.com", "password": "secret123"},
        headers=admin_headers,
    )
    assert r.status_code == 201
    body = r.json()
    assert "password" not in body and "hashed_password" not in body
    assert body["enabled"] is True

    stored = seeded.query(models.User).filter_by(username="clerk").one()
    assert stored.hashed_password != "secret123"


def test_group_is_the_only_route_to_a_permission(db_session):
    authority = models.Authority(name="USERS")
    db_session.add(authority)
    db_session.flush()
    delete_users = models.Permission(name="user:delete", authority_id=authority.id)
    role = models.Role(name="USER_MANAGER", permissions=[delete_users])
    group = models.Group(name="Support", roles=[role])
    user = models.User(
        username="support", email="support@example.com", hashed_password="x", groups=[group]
    )
    db_session.add_all([delete_users, role, group, user])
    db_session.commit()

    assert user.roles == []
    assert effective_permissions(user) == {"user:delete"}
    assert has_permission(user, "user:delete")
    assert not has_permission(user, "user:write")
