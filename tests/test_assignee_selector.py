"""Tests for assignee pool and selector — proves selection rules."""

import pytest
import random

from docaudit.errors import NoAssigneesError
from docaudit.review.roster import AssigneePool
from docaudit.review.selector import choose_assignee


# =====================================================================
# Pool Tests
# =====================================================================


class TestAssigneePool:
    def test_from_csv(self) -> None:
        pool = AssigneePool.from_csv("user1,user2,user3")
        assert pool.members() == ["user1", "user2", "user3"]
        assert pool.count == 3

    def test_trims_whitespace(self) -> None:
        assert AssigneePool.from_csv(" user1 , user2 ").members() == ["user1", "user2"]

    def test_drops_blank_entries(self) -> None:
        assert AssigneePool.from_csv("a,, ,b,").members() == ["a", "b"]

    def test_empty_values(self) -> None:
        assert not AssigneePool.from_csv("")
        assert not AssigneePool.from_csv(None)
        assert not AssigneePool.from_csv("   ,   ")

    def test_members_is_a_copy(self) -> None:
        pool = AssigneePool(["a"])
        pool.members().append("b")
        assert pool.members() == ["a"]


# =====================================================================
# Selection Tests
# =====================================================================


class TestChooseAssignee:
    def test_returns_pool_member(self) -> None:
        assignee = choose_assignee(AssigneePool.from_csv("user1,user2,user3"))
        assert assignee in {"user1", "user2", "user3"}

    def test_single_member(self) -> None:
        assert choose_assignee(["onlyuser"]) == "onlyuser"

    def test_accepts_plain_sequence_and_trims(self) -> None:
        assert choose_assignee(["  solo  ", ""]) == "solo"

    def test_empty_pool_fails(self) -> None:
        with pytest.raises(NoAssigneesError, match="No team members available"):
            choose_assignee(AssigneePool.from_csv(""))

    def test_whitespace_only_pool_fails(self) -> None:
        with pytest.raises(NoAssigneesError):
            choose_assignee(AssigneePool.from_csv("   ,   "))

    def test_same_seed_same_result(self) -> None:
        pool = AssigneePool(["a", "b", "c", "d", "e"])
        picks1 = [choose_assignee(pool, random.Random("seed")) for _ in range(5)]
        picks2 = [choose_assignee(pool, random.Random("seed")) for _ in range(5)]
        assert picks1 == picks2

    def test_every_member_reachable(self) -> None:
        pool = AssigneePool(["a", "b", "c"])
        rng = random.Random("coverage")
        seen = {choose_assignee(pool, rng) for _ in range(300)}
        assert seen == {"a", "b", "c"}
