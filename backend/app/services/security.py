"""Users, roles, groups, permissions and authorities.

Effective permissions of a user are the union of the permissions reached
through the user's own roles and through the roles of the user's groups.
"""

from typing import Iterable, Set

from app import models
from app.core.errors import DependentsExistError, ValidationFailedError
from app.core.security import hash_password
from app.schemas.security import (
    AuthorityRead,
    GroupRead,
    PermissionRead,
    RoleRead,
    UserProfileRead,
    UserRead,
)
from app.services.audit import audited
from app.services.crud import Collection, CrudService, Dependent, Reference

ADMIN_ROLE = "ADMIN"
USER_ROLE = "USER"


def effective_roles(user: models.User) -> Set[models.Role]:
    roles = set(user.roles)
    for group in user.groups:
        roles.update(group.roles)
    return roles


def role_names(user: models.User) -> Set[str]:
    return {r.name for r in effective_roles(user)}


def effective_permissions(user: models.User) -> Set[str]:
    return {p.name for role in effective_roles(user) for p in role.permissions}


def has_permission(user: models.User, name: str) -> bool:
    return name in effective_permissions(user)


def is_admin(user: models.User) -> bool:
    return ADMIN_ROLE in role_names(user)


def has_any_role(user: models.User, names: Iterable[str]) -> bool:
    owned = role_names(user)
    return ADMIN_ROLE in owned or bool(owned.intersection(names))


class _NamedService(CrudService):
    module = "security"
    fields = ("name", "description")
    required = {"name": "Name"}
    unique = (("name",),)
    search_fields = ("name", "description")
    order_by = "name"


class AuthorityService(_NamedService):
    model = models.Authority
    read_schema = AuthorityRead
    entity_name = "Authority"
    label = "Authority"
    dependents = (
        Dependent(
            models.Permission, "authority_id", "Cannot delete authority as it has permissions"
        ),
    )


class PermissionService(_NamedService):
    model = models.Permission
    read_schema = PermissionRead
    entity_name = "Permission"
    label = "Permission"
    references = (Reference("authority_id", models.Authority, "Authority", required=True),)
    nested = ("authority",)

    def before_delete(self, entity):
        used = (
            self.db.query(models.Role)
            .filter(models.Role.permissions.any(models.Permission.id == entity.id))
            .first()
        )
        if used is not None:
            raise DependentsExistError("Cannot delete permission as it is granted to roles")


class RoleService(_NamedService):
    model = models.Role
    read_schema = RoleRead
    entity_name = "Role"
    label = "Role"
    collections = (
        Collection(
            "permission_ids", "permissions", models.Permission, "Some permissions were not found"
        ),
    )

    def before_delete(self, entity):
        holder = (
            self.db.query(models.User)
            .filter(models.User.roles.any(models.Role.id == entity.id))
            .first()
        )
        if holder is not None:
            raise DependentsExistError("Cannot delete role as it is assigned to users")
        group = (
            self.db.query(models.Group)
            .filter(models.Group.roles.any(models.Role.id == entity.id))
            .first()
        )
        if group is not None:
            raise DependentsExistError("Cannot delete role as it is assigned to groups")


class GroupService(_NamedService):
    model = models.Group
    read_schema = GroupRead
    entity_name = "Group"
    label = "Group"
    collections = (Collection("role_ids", "roles", models.Role, "Some roles were not found"),)

    def before_delete(self, entity):
        member = (
            self.db.query(models.User)
            .filter(models.User.groups.any(models.Group.id == entity.id))
            .first()
        )
        if member is not None:
            raise DependentsExistError("Cannot delete group as it has members")


class UserService(CrudService):
    model = models.User
    read_schema = UserRead
    entity_name = "User"
    label = "User"
    module = "security"
    fields = ("username", "email", "enabled", "hashed_password")
    required = {"username": "Username", "email": "Email"}
    unique = (("username",), ("email",))
    collections = (
        Collection("role_ids", "roles", models.Role, "Some roles were not found"),
        Collection("group_ids", "groups", models.Group, "Some groups were not found"),
    )
    search_fields = ("username", "email")
    order_by = "username"

    def prepare(self, state, entity, creating):
        password = self.incoming.get("password")
        if password:
            state["hashed_password"] = hash_password(password)
        elif creating:
            raise ValidationFailedError.single("password", "Password is required")
        if state.get("enabled") is None:
            state["enabled"] = True if creating else entity.enabled
        if state.get("email"):
            state["email"] = str(state["email"]).strip().lower()

    def before_delete(self, entity):
        self.db.query(models.RefreshToken).filter(
            models.RefreshToken.user_id == entity.id
        ).delete(synchronize_session=False)

    def find_by_username(self, username: str):
        return self.repo.query().filter(models.User.username == username).first()

    def profile(self, user: models.User) -> UserProfileRead:
        data = self.to_read(user).model_dump()
        data["roles"] = sorted(role_names(user))
        data["groups"] = sorted(g.name for g in user.groups)
        data["permissions"] = sorted(effective_permissions(user))
        return UserProfileRead.model_validate(data)

    def permissions_of(self, user_id: int) -> list[str]:
        return sorted(effective_permissions(self.get_entity(user_id)))

    def _link(self, user_id, attr, model, related_id, add):
        user = self.get_entity(user_id)
        related = self.repo_for(model).get_or_raise(related_id)
        current = getattr(user, attr)
        if add and related not in current:
            current.append(related)
        elif not add and related in current:
            current.remove(related)
        self._commit()
        self.db.refresh(user)
        return self.to_read(user)

    @audited(models.AuditAction.UPDATE, method_name="assign_role")
    def assign_role(self, user_id: int, role_id: int) -> UserRead:
        return self._link(user_id, "roles", models.Role, role_id, add=True)

    @audited(models.AuditAction.UPDATE, method_name="unassign_role")
    def unassign_role(self, user_id: int, role_id: int) -> UserRead:
        return self._link(user_id, "roles", models.Role, role_id, add=False)

    @audited(models.AuditAction.UPDATE, method_name="assign_group")
    def assign_group(self, user_id: int, group_id: int) -> UserRead:
        return self._link(user_id, "groups", models.Group, group_id, add=True)

    @audited(models.AuditAction.UPDATE, method_name="unassign_group")
    def unassign_group(self, user_id: int, group_id: int) -> UserRead:
        return self._link(user_id, "groups", models.Group, group_id, add=False)
