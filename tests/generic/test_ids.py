import re

import pytest

from formtree._errors import IDError
from formtree.generic.element import Element
from formtree.generic.ids import (
    IDGenerator,
    collect_ids,
    generate_id,
    iter_ids,
    mint_unique,
)


class TestGenerateId:
    def test_format(self):
        assert re.fullmatch(r"element_\d+_[0-9a-z]{9}", generate_id())

    def test_custom_prefix_and_length(self):
        assert re.fullmatch(r"field_\d+_[0-9a-z]{5}", generate_id("field", 5))

    def test_practically_unique(self):
        ids = {generate_id() for _ in range(500)}
        assert len(ids) == 500


class TestIDGenerator:
    def test_draws_from_sequence(self):
        gen = IDGenerator(seq=["a", "b"])
        assert [gen(), gen()] == ["a", "b"]
        assert gen.issued == frozenset({"a", "b"})

    def test_skips_repeats(self):
        gen = IDGenerator(seq=["a", "a", "b"])
        assert [gen(), gen()] == ["a", "b"]

    def test_exhausted_sequence(self):
        gen = IDGenerator(seq=["a"])
        gen()
        with pytest.raises(IDError, match="exhausted"):
            gen()

    def test_gives_up_after_max_attempts(self):
        gen = IDGenerator(seq=["a"] * 10, max_attempts=3)
        gen()
        with pytest.raises(IDError):
            gen()

    def test_default_uses_prefix(self):
        assert IDGenerator("node")().startswith("node_")


class TestCollectIds:
    def test_pre_order(self, sample_tree):
        assert list(iter_ids(sample_tree)) == ["1", "2", "3", "4", "5", "6", "7"]

    def test_collect(self, sample_tree):
        assert collect_ids(sample_tree) == {"1", "2", "3", "4", "5", "6", "7"}

    def test_empty(self):
        assert collect_ids([]) == set()


class TestMintUnique:
    def test_records_minted_id(self):
        taken = {"a"}
        assert mint_unique(taken, IDGenerator(seq=["a", "b"])) == "b"
        assert taken == {"a", "b"}

    def test_constant_generator_fails(self):
        with pytest.raises(IDError):
            mint_unique({"x"}, lambda: "x", max_attempts=4)

    @pytest.mark.parametrize("bad", [None, "", 5])
    def test_invalid_generator_output(self, bad):
        with pytest.raises(IDError):
            mint_unique(set(), lambda: bad)

    def test_element_ids_are_strings(self):
        taken = collect_ids([Element(id="1", kind="text")])
        assert mint_unique(taken, lambda: "2") == "2"
