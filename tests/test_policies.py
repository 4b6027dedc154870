"""
Tests for principals, tenant scoping and authorization rules.
"""
from types import SimpleNamespace
from uuid import uuid4

import pytest

from webacademy.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from webacademy.domain.constants import UserRole
from webacademy.services.auth.authorization.policies import (
    can_edit_course,
    can_view_course,
    ensure_can_change_settings,
    ensure_can_create_user,
    ensure_can_delete_user,
    ensure_can_modify_user,
)
from webacademy.services.auth.authorization.principal import Principal, PrincipalKind, principal_kind
from webacademy.services.auth.authorization.tenant import RequestContext


def make_principal(role: str, institute=None) -> Principal:
    user = SimpleNamespace(id=uuid4(), role=role, institute=institute, email="u@ucao.edu", name="U")
    return Principal.from_user(user)


def make_course(institute=None, created_by_id=None, status="published"):
    return SimpleNamespace(id=uuid4(), institute=institute, created_by_id=created_by_id, status=status)


class FakeAssignments:
    def __init__(self, assigned=False):
        self.assigned = assigned
        self.calls = []

    async def is_assigned(self, user_id, course_id, institute):
        self.calls.append((user_id, course_id, institute))
        return self.assigned


class TestPrincipal:
    def test_kinds(self):
        assert principal_kind("admin", None) == PrincipalKind.SUPER_ADMIN
        assert principal_kind("admin", "A") == PrincipalKind.INSTITUTE_ADMIN
        assert principal_kind("formateur", "A") == PrincipalKind.INSTRUCTOR
        assert principal_kind("etudiant", "A") == PrincipalKind.STUDENT

    def test_capabilities(self):
        super_admin = make_principal(UserRole.ADMIN.value)
        instructor = make_principal(UserRole.INSTRUCTOR.value, "B")
        student = make_principal(UserRole.STUDENT.value, "B")

        assert super_admin.is_admin and super_admin.is_super_admin
        assert instructor.is_staff and not instructor.is_admin
        assert not student.is_staff
        assert super_admin.at_least(PrincipalKind.INSTITUTE_ADMIN)


class TestRequestContext:
    def test_tenant_follows_principal_institute(self):
        assert RequestContext.for_principal(make_principal("admin", "A")).tenant == "A"
        assert RequestContext.for_principal(make_principal("admin")).tenant is None
        assert RequestContext().tenant is None

    def test_scopes_are_none_without_tenant(self):
        ctx = RequestContext()
        column = SimpleNamespace()
        assert ctx.strict_scope(column) is None
        assert ctx.shared_scope(column) is None

    def test_institute_filter_conflict_is_forbidden(self):
        from webacademy.infrastructure.database.models import Course

        ctx = RequestContext.for_principal(make_principal("admin", "A"))
        with pytest.raises(AuthorizationError):
            ctx.institute_filter(Course.institute, "B")
        assert ctx.institute_filter(Course.institute, "A") is not None
        assert ctx.institute_filter(Course.institute, None) is None

    def test_row_visibility(self):
        ctx = RequestContext.for_principal(make_principal("formateur", "A"))
        assert ctx.owns_row("A")
        assert not ctx.owns_row("B")
        assert not ctx.owns_row(None)
        assert ctx.owns_row(None, shared=True)
        with pytest.raises(NotFoundError):
            ctx.ensure_in_tenant("B", "absent")

    def test_tenant_wins_on_write(self):
        ctx = RequestContext.for_principal(make_principal("admin", "B"))
        assert ctx.institute_for_write(None) == "B"
        assert ctx.institute_for_write("B") == "B"
        with pytest.raises(AuthorizationError):
            ctx.institute_for_write("C")

        super_ctx = RequestContext.for_principal(make_principal("admin"))
        assert super_ctx.institute_for_write("C") == "C"
        assert super_ctx.institute_for_write(None) is None


class TestCourseRules:
    async def test_institute_admin_edits_only_own_institute(self):
        admin = make_principal("admin", "A")
        assignments = FakeAssignments()
        assert await can_edit_course(admin, make_course("A"), assignments)
        assert not await can_edit_course(admin, make_course("B"), assignments)

    async def test_super_admin_edits_everything(self):
        admin = make_principal("admin")
        assert await can_edit_course(admin, make_course("C"), FakeAssignments())
        assert await can_edit_course(admin, make_course(None), FakeAssignments())

    async def test_creator_may_edit(self):
        instructor = make_principal("formateur", "A")
        course = make_course("A", created_by_id=instructor.user_id)
        assignments = FakeAssignments()
        assert await can_edit_course(instructor, course, assignments)
        assert assignments.calls == []

    async def test_assigned_instructor_may_edit(self):
        instructor = make_principal("formateur", "A")
        course = make_course("A")
        assignments = FakeAssignments(assigned=True)
        assert await can_edit_course(instructor, course, assignments)
        assert assignments.calls == [(instructor.user_id, course.id, "A")]

    async def test_student_never_edits(self):
        student = make_principal("etudiant", "A")
        assert not await can_edit_course(student, make_course("A"), FakeAssignments(assigned=True))

    def test_drafts_are_hidden_from_others(self):
        creator = make_principal("formateur", "A")
        draft = make_course("A", created_by_id=creator.user_id, status="draft")
        assert can_view_course(creator, draft)
        assert can_view_course(make_principal("admin", "A"), draft)
        assert not can_view_course(make_principal("etudiant", "A"), draft)
        assert not can_view_course(None, draft)
        assert can_view_course(None, make_course("A"))


class TestUserRules:
    def test_only_super_admin_creates_admins(self):
        institute_ctx = RequestContext.for_principal(make_principal("admin", "A"))
        super_ctx = RequestContext.for_principal(make_principal("admin"))

        with pytest.raises(AuthorizationError):
            ensure_can_create_user(institute_ctx, "admin", "A")
        with pytest.raises(ValidationError):
            ensure_can_create_user(super_ctx, "admin", None)
        ensure_can_create_user(super_ctx, "admin", "B")
        ensure_can_create_user(institute_ctx, "formateur", None)

    def test_modifying_admins_needs_super_admin(self):
        institute_ctx = RequestContext.for_principal(make_principal("admin", "A"))
        target_admin = SimpleNamespace(id=uuid4(), role="admin", institute="A")
        target_student = SimpleNamespace(id=uuid4(), role="etudiant", institute="A")

        with pytest.raises(AuthorizationError):
            ensure_can_modify_user(institute_ctx, target_admin, None, None, False)
        with pytest.raises(AuthorizationError):
            ensure_can_modify_user(institute_ctx, target_student, "admin", None, False)
        with pytest.raises(AuthorizationError):
            ensure_can_modify_user(institute_ctx, target_student, None, "B", True)
        ensure_can_modify_user(institute_ctx, target_student, None, "A", True)

    def test_promoting_to_admin_requires_institute(self):
        super_ctx = RequestContext.for_principal(make_principal("admin"))
        target = SimpleNamespace(id=uuid4(), role="formateur", institute=None)
        with pytest.raises(ValidationError):
            ensure_can_modify_user(super_ctx, target, "admin", None, False)
        ensure_can_modify_user(super_ctx, target, "admin", "C", True)

    def test_delete_rules(self):
        institute_ctx = RequestContext.for_principal(make_principal("admin", "A"))
        with pytest.raises(AuthorizationError):
            ensure_can_delete_user(institute_ctx, SimpleNamespace(id=uuid4(), role="admin", institute="A"))
        with pytest.raises(NotFoundError):
            ensure_can_delete_user(institute_ctx, SimpleNamespace(id=uuid4(), role="etudiant", institute="B"))
        ensure_can_delete_user(institute_ctx, SimpleNamespace(id=uuid4(), role="etudiant", institute="A"))

    def test_settings_are_super_admin_only(self):
        with pytest.raises(AuthorizationError):
            ensure_can_change_settings(RequestContext.for_principal(make_principal("admin", "A")))
        ensure_can_change_settings(RequestContext.for_principal(make_principal("admin")))
