import random

import pytest

from soundsorter.engines import ALGORITHMS, get_engine, sort
from soundsorter.errors import InvalidAlgorithm
from soundsorter.moves import MoveLog, Overwrite, Swap, replay

ALGORITHM_KEYS = [key for _, key in ALGORITHMS]


# Hand-traced move sequences for [0.3, 0.1, 0.2]
FROZEN_THREE = {
    "bubble":    [Swap(0, 1), Swap(1, 2)],
    "insertion": [Swap(1, 0), Overwrite(0, 0.1), Swap(2, 1), Overwrite(1, 0.2)],
    "selection": [Swap(0, 1), Swap(1, 2)],
    "heap":      [Swap(0, 2), Swap(0, 1)],
    "quick":     [Swap(0, 1), Swap(1, 2)],
    "merge":     [Overwrite(1, 0.1), Overwrite(2, 0.2),
                  Overwrite(0, 0.1), Overwrite(1, 0.2), Overwrite(2, 0.3)],
}


class Tagged(float):
    """A float that remembers where it came from."""

    def __new__(cls, value, tag):
        obj = float.__new__(cls, value)
        obj.tag = tag
        return obj


class TestRegistry:
    def test_six_algorithms_in_menu_order(self):
        assert ALGORITHM_KEYS == ["bubble", "insertion", "selection", "heap", "quick", "merge"]
        assert all(name.endswith("Sort") for name, _ in ALGORITHMS)

    def test_unknown_key_raises_invalid_algorithm(self):
        with pytest.raises(InvalidAlgorithm) as ei:
            sort("bogo", [0.2, 0.1])
        assert ei.value.name == "bogo"
        assert "bubble" in ei.value.known
        assert "bogo" in str(ei.value)

    def test_invalid_algorithm_is_a_key_error(self):
        with pytest.raises(KeyError):
            get_engine("shell")


@pytest.mark.parametrize("key", ALGORITHM_KEYS)
class TestEveryEngine:
    def test_frozen_three_element_sequence(self, key, three):
        assert list(sort(key, three)) == FROZEN_THREE[key]

    @pytest.mark.parametrize("arr", [[], [0.42]])
    def test_trivial_input_gives_empty_log(self, key, arr):
        moves = sort(key, arr)
        assert len(moves) == 0
        assert moves.length == len(arr)

    def test_input_is_not_mutated(self, key, three):
        before = list(three)
        sort(key, three)
        assert three == before

    def test_log_is_tagged_with_length(self, key, three):
        moves = sort(key, three)
        assert isinstance(moves, MoveLog)
        assert moves.length == 3

    @pytest.mark.parametrize("seed", range(12))
    def test_replay_sorts_random_arrays(self, key, seed):
        r = random.Random(seed)
        n = r.choice([2, 3, 5, 17, 30, 64, 100])
        arr = [r.random() for _ in range(n)]
        out = replay(arr, sort(key, arr))
        assert out == sorted(arr)

    def test_replay_handles_duplicates(self, key):
        arr = [0.5, 0.1, 0.5, 0.1, 0.9, 0.5, 0.0]
        assert replay(arr, sort(key, arr)) == sorted(arr)

    def test_sorted_input_stays_sorted(self, key):
        arr = [i / 20 for i in range(20)]
        assert replay(arr, sort(key, arr)) == arr

    def test_indices_stay_in_bounds(self, key, rng):
        arr = [rng.random() for _ in range(40)]
        for m in sort(key, arr):
            assert 0 <= m.i < 40
            if isinstance(m, Swap):
                assert 0 <= m.j < 40


class TestMoveCounts:
    def test_sorted_input_no_swaps_for_bubble_and_insertion(self):
        arr = [i / 10 for i in range(10)]
        assert len(sort("bubble", arr)) == 0
        ins = sort("insertion", arr)
        assert ins.swaps() == 0
        # one no-op placement per key
        assert ins.overwrites() == 9
        assert replay(arr, ins) == arr

    def test_sorted_input_no_moves_for_selection(self):
        assert len(sort("selection", [0.1, 0.2, 0.3, 0.4])) == 0

    @pytest.mark.parametrize("seed", range(8))
    def test_quadratic_bounds(self, seed):
        r = random.Random(seed)
        n = 25
        arr = [r.random() for _ in range(n)]
        bound = n * (n - 1) // 2
        bub = sort("bubble", arr)
        sel = sort("selection", arr)
        ins = sort("insertion", arr)
        assert bub.overwrites() == 0 and len(bub) <= bound
        assert sel.overwrites() == 0 and len(sel) <= bound
        assert ins.overwrites() <= n and ins.swaps() <= bound

    def test_reversed_input_hits_bubble_worst_case(self):
        arr = [i / 10 for i in range(10, 0, -1)]
        assert len(sort("bubble", arr)) == 45

    def test_insertion_swap_count_equals_inversions(self, rng):
        arr = [rng.random() for _ in range(30)]
        inversions = sum(1 for a in range(30) for b in range(a + 1, 30) if arr[a] > arr[b])
        assert sort("insertion", arr).swaps() == inversions

    def test_merge_writes_n_log_n_overwrites(self):
        # 8 elements, three merge levels, every level writes all 8 slots
        arr = [0.8, 0.1, 0.6, 0.3, 0.7, 0.2, 0.5, 0.4]
        moves = sort("merge", arr)
        assert moves.swaps() == 0
        assert moves.overwrites() == 24


class TestAlgorithmDetails:
    def test_heap_prefers_left_child_on_tie(self):
        # root 0.1 with equal children: first sift swaps with the left one
        moves = sort("heap", [0.1, 0.5, 0.5])
        assert moves[0] == Swap(0, 1)

    def test_quick_uses_last_element_as_pivot(self):
        # pivot 0.5 is the maximum: every element is swapped into the low region in place
        moves = sort("quick", [0.1, 0.2, 0.5])
        assert list(moves)[:3] == [Swap(0, 0), Swap(1, 1), Swap(2, 2)]

    def test_merge_uses_absolute_indices(self):
        moves = sort("merge", [0.9, 0.8, 0.7, 0.6])
        assert {m.i for m in moves} == {0, 1, 2, 3}
        # right half is merged at offset 2
        assert moves[2] == Overwrite(2, 0.6)

    def test_merge_is_stable(self):
        arr = [Tagged(0.5, "a"), Tagged(0.3, "x"), Tagged(0.5, "b")]
        out = replay(arr, sort("merge", arr))
        assert [v.tag for v in out] == ["x", "a", "b"]
