"""Unit tests for app.services.members: CRUD rules, paging and cache behaviour."""

import unittest
import uuid
from datetime import date
from unittest.mock import MagicMock

from app.models.member import Member
from app.repositories.errors import ConstraintViolation
from app.repositories.members import MemberRepository
from app.schemas.member import CreateMemberRequest, UpdateMemberRequest
from app.services.errors import DuplicateEmailError, MemberNotFoundError
from app.services.member_cache import MemberCache
from app.services.members import MemberService, build_page, to_response
from tests.helpers import make_member


def _create_request(**overrides: object) -> CreateMemberRequest:
    values: dict[str, object] = {
        "firstName": "Alice",
        "lastName": "Walker",
        "dateOfBirth": "1992-03-04",
        "email": "alice.walker@example.com",
    }
    values.update(overrides)
    return CreateMemberRequest.model_validate(values)


def _update_request(**overrides: object) -> UpdateMemberRequest:
    values: dict[str, object] = {
        "firstName": "John",
        "lastName": "Doe",
        "dateOfBirth": "1985-05-15",
        "email": "john.doe@example.com",
    }
    values.update(overrides)
    return UpdateMemberRequest.model_validate(values)


class MemberServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.repository = MagicMock(spec=MemberRepository)
        self.repository.save.side_effect = lambda member: member
        self.cache = MemberCache()
        self.service = MemberService(self.repository, self.cache)


class TestBuildPage(unittest.TestCase):
    """Paging arithmetic: totalPages = ceil(total / size), last = page >= totalPages - 1."""

    def test_middle_page_is_not_last(self) -> None:
        page = build_page([], page=1, size=10, total_elements=25)
        self.assertEqual(page.total_pages, 3)
        self.assertFalse(page.last)

    def test_final_page_is_last(self) -> None:
        page = build_page([], page=2, size=10, total_elements=25)
        self.assertEqual(page.total_pages, 3)
        self.assertTrue(page.last)

    def test_exact_multiple(self) -> None:
        page = build_page([], page=0, size=10, total_elements=20)
        self.assertEqual(page.total_pages, 2)
        self.assertFalse(page.last)

    def test_empty_result_is_last(self) -> None:
        page = build_page([], page=0, size=20, total_elements=0)
        self.assertEqual(page.total_pages, 0)
        self.assertTrue(page.last)

    def test_page_beyond_end_is_last(self) -> None:
        self.assertTrue(build_page([], page=7, size=10, total_elements=25).last)

    def test_serialized_field_names(self) -> None:
        dumped = build_page([], page=0, size=10, total_elements=1).model_dump(by_alias=True)
        self.assertEqual(
            set(dumped),
            {"content", "page", "size", "totalElements", "totalPages", "last"},
        )


class TestListMembers(MemberServiceTestCase):
    def test_no_filters_passes_none_through(self) -> None:
        members = [make_member(), make_member(first_name="Jane", email="jane@example.com")]
        self.repository.search.return_value = (members, 2)
        result = self.service.list_members(page=0, size=20)
        self.repository.search.assert_called_once_with(
            page=0,
            size=20,
            sort="createdAt",
            direction="DESC",
            first_name=None,
            last_name=None,
        )
        self.assertEqual(len(result.content), 2)
        self.assertEqual(result.total_elements, 2)
        self.assertEqual(result.total_pages, 1)
        self.assertTrue(result.last)

    def test_filters_and_sort_passed_verbatim(self) -> None:
        self.repository.search.return_value = ([], 0)
        self.service.list_members(
            page=1, size=5, sort="lastName", direction="asc", first_name="jo", last_name="sm"
        )
        self.repository.search.assert_called_once_with(
            page=1,
            size=5,
            sort="lastName",
            direction="asc",
            first_name="jo",
            last_name="sm",
        )

    def test_empty_page(self) -> None:
        self.repository.search.return_value = ([], 0)
        result = self.service.list_members(first_name="nobody")
        self.assertEqual(result.content, [])
        self.assertEqual(result.total_elements, 0)

    def test_list_does_not_touch_cache(self) -> None:
        self.repository.search.return_value = ([make_member()], 1)
        self.service.list_members()
        self.assertEqual(len(self.cache), 0)


class TestGetById(MemberServiceTestCase):
    def test_returns_projection(self) -> None:
        member = make_member()
        self.repository.find_by_id.return_value = member
        result = self.service.get_by_id(member.id)
        self.assertEqual(result.id, member.id)
        self.assertEqual(result.first_name, "John")
        self.assertEqual(result.email, "john.doe@example.com")
        self.assertEqual(result.date_of_birth, date(1985, 5, 15))

    def test_not_found(self) -> None:
        missing = uuid.uuid4()
        self.repository.find_by_id.return_value = None
        with self.assertRaises(MemberNotFoundError) as ctx:
            self.service.get_by_id(missing)
        self.assertIn(str(missing), ctx.exception.message)
        self.assertEqual(len(self.cache), 0)

    def test_second_call_served_from_cache(self) -> None:
        member = make_member()
        self.repository.find_by_id.return_value = member
        first = self.service.get_by_id(member.id)
        second = self.service.get_by_id(member.id)
        self.assertEqual(first, second)
        self.repository.find_by_id.assert_called_once_with(member.id)

    def test_cached_value_is_detached_copy(self) -> None:
        member = make_member()
        self.repository.find_by_id.return_value = member
        self.service.get_by_id(member.id)
        member.first_name = "Mutated"
        self.assertEqual(self.service.get_by_id(member.id).first_name, "John")


class TestCreate(MemberServiceTestCase):
    def test_creates_when_email_unique(self) -> None:
        self.repository.exists_by_email.return_value = False
        result = self.service.create(_create_request())
        self.repository.exists_by_email.assert_called_once_with("alice.walker@example.com")
        self.repository.save.assert_called_once()
        saved: Member = self.repository.save.call_args.args[0]
        self.assertEqual(saved.first_name, "Alice")
        self.assertEqual(saved.last_name, "Walker")
        self.assertEqual(saved.date_of_birth, date(1992, 3, 4))
        self.assertEqual(saved.email, "alice.walker@example.com")
        self.assertIsNotNone(saved.id)
        self.assertEqual(result.id, saved.id)
        self.assertEqual(saved.created_at, saved.updated_at)

    def test_duplicate_email_never_inserts(self) -> None:
        self.repository.exists_by_email.return_value = True
        with self.assertRaises(DuplicateEmailError) as ctx:
            self.service.create(_create_request())
        self.assertIn("alice.walker@example.com", ctx.exception.message)
        self.repository.save.assert_not_called()

    def test_store_constraint_surfaces_as_duplicate(self) -> None:
        self.repository.exists_by_email.return_value = False
        self.repository.save.side_effect = ConstraintViolation("unique")
        with self.assertRaises(DuplicateEmailError):
            self.service.create(_create_request())
        self.repository.save.assert_called_once()

    def test_create_does_not_populate_cache(self) -> None:
        self.repository.exists_by_email.return_value = False
        self.service.create(_create_request())
        self.assertEqual(len(self.cache), 0)


class TestUpdate(MemberServiceTestCase):
    def test_not_found(self) -> None:
        self.repository.find_by_id.return_value = None
        with self.assertRaises(MemberNotFoundError):
            self.service.update(uuid.uuid4(), _update_request())
        self.repository.save.assert_not_called()

    def test_same_email_skips_duplicate_check(self) -> None:
        member = make_member()
        self.repository.find_by_id.return_value = member
        # Even a store that claims every email exists must not block a same-email update.
        self.repository.exists_by_email.return_value = True
        result = self.service.update(member.id, _update_request(firstName="Johnny"))
        self.repository.exists_by_email.assert_not_called()
        self.assertEqual(result.first_name, "Johnny")

    def test_changed_email_to_unique(self) -> None:
        member = make_member()
        self.repository.find_by_id.return_value = member
        self.repository.exists_by_email.return_value = False
        result = self.service.update(member.id, _update_request(email="new@example.com"))
        self.repository.exists_by_email.assert_called_once_with("new@example.com")
        self.assertEqual(result.email, "new@example.com")

    def test_changed_email_to_taken(self) -> None:
        member = make_member()
        self.repository.find_by_id.return_value = member
        self.repository.exists_by_email.return_value = True
        with self.assertRaises(DuplicateEmailError):
            self.service.update(member.id, _update_request(email="jane.smith@example.com"))
        self.repository.save.assert_not_called()

    def test_update_moves_updated_at_forward(self) -> None:
        member = make_member()
        created_at = member.created_at
        self.repository.find_by_id.return_value = member
        result = self.service.update(member.id, _update_request(lastName="Dough"))
        self.assertEqual(result.created_at, created_at)
        self.assertGreater(result.updated_at, created_at)

    def test_update_evicts_cache_and_next_read_is_fresh(self) -> None:
        member = make_member()
        self.repository.find_by_id.return_value = member
        self.assertEqual(self.service.get_by_id(member.id).first_name, "John")

        self.service.update(member.id, _update_request(firstName="Jonathan"))
        self.assertIsNone(self.cache.get(member.id))

        self.assertEqual(self.service.get_by_id(member.id).first_name, "Jonathan")

    def test_failed_save_keeps_cache_entry(self) -> None:
        member = make_member()
        self.repository.find_by_id.return_value = member
        cached = self.service.get_by_id(member.id)
        self.repository.exists_by_email.return_value = False
        self.repository.save.side_effect = ConstraintViolation("unique")
        with self.assertRaises(DuplicateEmailError):
            self.service.update(member.id, _update_request(email="race@example.com"))
        self.assertIs(self.cache.get(member.id), cached)


class TestDelete(MemberServiceTestCase):
    def test_deletes_existing(self) -> None:
        member_id = uuid.uuid4()
        self.repository.exists_by_id.return_value = True
        self.service.delete(member_id)
        self.repository.delete_by_id.assert_called_once_with(member_id)

    def test_not_found(self) -> None:
        self.repository.exists_by_id.return_value = False
        with self.assertRaises(MemberNotFoundError):
            self.service.delete(uuid.uuid4())
        self.repository.delete_by_id.assert_not_called()

    def test_delete_evicts_cache(self) -> None:
        member = make_member()
        self.cache.put(member.id, to_response(member))
        self.repository.exists_by_id.return_value = True
        self.service.delete(member.id)
        self.assertIsNone(self.cache.get(member.id))

    def test_failed_delete_keeps_cache_entry(self) -> None:
        member = make_member()
        cached = to_response(member)
        self.cache.put(member.id, cached)
        self.repository.exists_by_id.return_value = True
        self.repository.delete_by_id.side_effect = RuntimeError("store unavailable")
        with self.assertRaises(RuntimeError):
            self.service.delete(member.id)
        self.assertIs(self.cache.get(member.id), cached)


if __name__ == "__main__":
    unittest.main()
