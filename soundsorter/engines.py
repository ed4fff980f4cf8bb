import logging

from .errors import InvalidAlgorithm
from .moves import MoveLog, Overwrite, Swap

log = logging.getLogger(__name__)

# ============================================================
# ===================== SORTING ALGORITHMS ===================
# ============================================================
#
# Every algorithm is a generator over a private list `arr`.
# It mutates `arr` and yields exactly one Move per mutation, so
# replaying the yielded moves against the original input walks
# through the same intermediate states the engine saw.

def bubble_sort(arr):
    swapped = True
    while swapped:
        swapped = False
        for i in range(1, len(arr)):
            if arr[i-1] > arr[i]:
                arr[i-1], arr[i] = arr[i], arr[i-1]; swapped = True
                yield Swap(i-1, i)

def insertion_sort(arr):
    for i in range(1, len(arr)):
        key = arr[i]; j = i - 1
        while j >= 0 and arr[j] > key:
            # the key travels down with each swap, so arr[j] == key afterwards
            arr[j+1], arr[j] = arr[j], arr[j+1]; yield Swap(j+1, j); j -= 1
        # unconditional, even when the key never moved
        arr[j+1] = key; yield Overwrite(j+1, key)

def selection_sort(arr):
    n = len(arr)
    for i in range(n - 1):
        mi = i
        for j in range(i+1, n):
            if arr[j] < arr[mi]: mi = j
        if mi != i:
            arr[i], arr[mi] = arr[mi], arr[i]; yield Swap(i, mi)

def heap_sort(arr):
    def sift(n, i):
        while True:
            lg, l, r = i, 2*i+1, 2*i+2
            if l < n and arr[l] > arr[lg]: lg = l
            # strict > keeps the left child on a tie
            if r < n and arr[r] > arr[lg]: lg = r
            if lg == i: return
            arr[i], arr[lg] = arr[lg], arr[i]; yield Swap(i, lg)
            i = lg
    n = len(arr)
    for i in range(n//2-1, -1, -1): yield from sift(n, i)
    for end in range(n-1, 0, -1):
        arr[0], arr[end] = arr[end], arr[0]; yield Swap(0, end)
        yield from sift(end, 0)

def quick_sort(arr):
    def partition(lo, hi):
        pivot = arr[hi]; i = lo - 1
        for j in range(lo, hi):
            if arr[j] < pivot:
                i += 1; arr[i], arr[j] = arr[j], arr[i]; yield Swap(i, j)
        arr[i+1], arr[hi] = arr[hi], arr[i+1]; yield Swap(i+1, hi)
        return i + 1
    def _q(lo, hi):
        if lo >= hi: return
        p = yield from partition(lo, hi)
        yield from _q(lo, p-1); yield from _q(p+1, hi)
    yield from _q(0, len(arr)-1)

def merge_sort(arr):
    """
    Top-down merge sort.

    Each level sorts scratch copies of its halves and returns the merged
    result; only the writes back into `arr` (at absolute offset `lo`)
    become moves. Ties take from the left half, which keeps it stable.
    """
    def _ms(part, lo):
        if len(part) <= 1: return list(part)
        mid = len(part) // 2
        left  = yield from _ms(part[:mid], lo)
        right = yield from _ms(part[mid:], lo + mid)
        merged = []; i = j = 0
        while i < len(left) and j < len(right):
            if right[j] < left[i]: merged.append(right[j]); j += 1
            else:                  merged.append(left[i]);  i += 1
        merged.extend(left[i:]); merged.extend(right[j:])
        for k, v in enumerate(merged):
            arr[lo+k] = v; yield Overwrite(lo+k, v)
        return merged
    yield from _ms(list(arr), 0)

# ============================================================
# ========================= REGISTRY =========================
# ============================================================

ALGORITHMS = [
    ("Bubble Sort",     "bubble"),
    ("Insertion Sort",  "insertion"),
    ("Selection Sort",  "selection"),
    ("Heap Sort",       "heap"),
    ("Quick Sort",      "quick"),
    ("Merge Sort",      "merge"),
]

_ENGINES = {
    "bubble":    bubble_sort,
    "insertion": insertion_sort,
    "selection": selection_sort,
    "heap":      heap_sort,
    "quick":     quick_sort,
    "merge":     merge_sort,
}


def get_engine(key):
    try:
        return _ENGINES[key]
    except KeyError:
        raise InvalidAlgorithm(key, _ENGINES) from None


def sort(key, array) -> MoveLog:
    """
    Run algorithm `key` on a private copy of `array` and return its MoveLog.

    `array` itself is never touched. Raises InvalidAlgorithm before doing
    any work if the key is unknown.
    """
    engine = get_engine(key)
    work = list(array)
    moves = MoveLog.record(len(work), engine(work))
    log.debug("%s: %d moves for n=%d", key, len(moves), len(work))
    return moves
