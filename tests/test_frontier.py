"""
Unit tests for the decrease-key PriorityQueue and the lazy heapq frontier.
"""

import random

import pytest

from pathgraph import AlgorithmError, LazyPriorityQueue, PriorityQueue

QUEUES = [PriorityQueue, LazyPriorityQueue]


@pytest.mark.parametrize("queue_cls", QUEUES)
def test_empty_queue(queue_cls):
    pq = queue_cls()

    assert pq.is_empty()
    assert pq.poll() is None
    assert pq.peek() is None
    assert len(pq) == 0


@pytest.mark.parametrize("queue_cls", QUEUES)
def test_poll_returns_min_priority_first(queue_cls):
    pq = queue_cls()
    for element, priority in [("c", 3), ("a", 1), ("e", 5), ("b", 2), ("d", 4)]:
        pq.offer(element, priority)

    assert pq.peek() == "a"
    assert [pq.poll() for _ in range(5)] == ["a", "b", "c", "d", "e"]
    assert pq.is_empty()


@pytest.mark.parametrize("queue_cls", QUEUES)
def test_change_priority_both_directions(queue_cls):
    pq = queue_cls()
    pq.offer("x", 10)
    pq.offer("y", 20)
    pq.offer("z", 30)

    pq.change_priority("z", 5)
    assert pq.peek() == "z"

    pq.change_priority("z", 25)
    assert pq.peek() == "x"

    assert [pq.poll() for _ in range(3)] == ["x", "y", "z"]


@pytest.mark.parametrize("queue_cls", QUEUES)
def test_offer_twice_and_unknown_change_raise(queue_cls):
    pq = queue_cls()
    pq.offer("x", 1)

    with pytest.raises(ValueError):
        pq.offer("x", 2)
    with pytest.raises(KeyError):
        pq.change_priority("missing", 0)


@pytest.mark.parametrize("queue_cls", QUEUES)
def test_infinite_priorities(queue_cls):
    inf = float("inf")
    pq = queue_cls()
    pq.offer("far", inf)
    pq.offer("src", 0)
    pq.offer("other", inf)

    assert pq.poll() == "src"
    pq.change_priority("other", 3)
    assert pq.poll() == "other"
    assert pq.poll() == "far"


def test_priority_of_and_contains():
    pq = PriorityQueue()
    pq.offer("x", 4)

    assert "x" in pq
    assert pq.priority_of("x") == 4
    pq.change_priority("x", 1)
    assert pq.priority_of("x") == 1

    pq.poll()
    assert "x" not in pq
    assert pq.values() == []


def test_position_index_tracks_every_swap():
    pq = PriorityQueue()
    for i, p in enumerate([9, 8, 7, 6, 5, 4, 3, 2, 1]):
        pq.offer(i, p)
        pq.check_invariants()

    assert sorted(pq.values()) == list(range(9))
    assert pq._pos == {e: i for i, e in enumerate(pq.values())}


def test_check_invariants_detects_divergence():
    pq = PriorityQueue()
    pq.offer("a", 1)
    pq.offer("b", 2)
    pq._pos["a"] = 1

    with pytest.raises(AlgorithmError):
        pq.check_invariants()


@pytest.mark.parametrize("seed", range(8))
def test_random_interleaving_keeps_invariants(seed):
    rnd = random.Random(seed)
    pq = PriorityQueue()
    live = {}
    next_id = 0

    for _ in range(400):
        op = rnd.random()
        if op < 0.45 or not live:
            pri = rnd.randint(0, 50)
            pq.offer(next_id, pri)
            live[next_id] = pri
            next_id += 1
        elif op < 0.75:
            element = rnd.choice(sorted(live))
            pri = rnd.randint(0, 50)
            pq.change_priority(element, pri)
            live[element] = pri
        else:
            element = pq.poll()
            assert live[element] == min(live.values())
            del live[element]
        pq.check_invariants()
        assert len(pq) == len(live)

    drained = []
    while not pq.is_empty():
        element = pq.poll()
        drained.append(live.pop(element))
        pq.check_invariants()
    assert drained == sorted(drained)
    assert not live


@pytest.mark.parametrize("seed", range(4))
def test_lazy_queue_matches_indexed_priorities(seed):
    rnd = random.Random(seed)
    indexed = PriorityQueue()
    lazy = LazyPriorityQueue()
    live = {}

    for i in range(60):
        pri = rnd.randint(0, 100)
        indexed.offer(i, pri)
        lazy.offer(i, pri)
        live[i] = pri
    for _ in range(80):
        element = rnd.randrange(60)
        pri = rnd.randint(0, 100)
        indexed.change_priority(element, pri)
        lazy.change_priority(element, pri)
        live[element] = pri

    from_indexed = [live[indexed.poll()] for _ in range(60)]
    from_lazy = [live[lazy.poll()] for _ in range(60)]
    assert from_indexed == from_lazy == sorted(live.values())
    assert lazy.is_empty() and lazy.poll() is None


def test_poll_sifts_down_to_left_child_on_tie():
    pq = PriorityQueue()
    for element, priority in [("root", 0), ("a", 5), ("b", 5), ("c", 9)]:
        pq.offer(element, priority)

    assert pq.poll() == "root"
    assert pq.values() == ["a", "c", "b"]
    pq.check_invariants()


def test_equal_priority_offer_stays_below_parent():
    pq = PriorityQueue()
    pq.offer("first", 3)
    pq.offer("second", 3)
    pq.offer("third", 3)

    assert pq.values() == ["first", "second", "third"]
    assert pq.peek() == "first"

    pq.change_priority("third", 3)
    assert pq.values() == ["first", "second", "third"]
