from conftest import make_entries, make_hash

from stakelottery.lottery import CoinstakeEntry, calculate_lottery_score, rank_coinstakes


def scored(scores: dict):
    return lambda txid, seed: scores[txid]


SEED = make_hash(0x5EED)


def test_score_is_double_sha256_of_serialized_hashes():
    score = calculate_lottery_score(make_hash(1), make_hash(2))

    assert score == int(
        "ff8f6e7ac7aa0bfc98af8be24ed6ae1ab243f64aaa065366b2215e697fddb64b", 16
    )


def test_score_depends_on_seed_and_order():
    a, b = make_hash(1), make_hash(2)

    assert calculate_lottery_score(a, b) == calculate_lottery_score(a, b)
    assert calculate_lottery_score(a, b) != calculate_lottery_score(b, a)
    assert calculate_lottery_score(a, b) != calculate_lottery_score(a, make_hash(3))
    assert 0 <= calculate_lottery_score(a, b) < 2**256


def test_empty_and_single():
    assert rank_coinstakes([], SEED) == (True, [])

    entry = CoinstakeEntry(make_hash(1), b"payee")

    assert rank_coinstakes([entry], SEED, scored({entry.transaction_id: 1})) == (True, [entry])


def test_sorts_best_first():
    entries = list(make_entries(4))
    scores = dict(zip((e.transaction_id for e in entries), [10, 40, 20, 30]))

    should_update, ranked = rank_coinstakes(entries, SEED, scored(scores))

    assert should_update is True
    assert [scores[e.transaction_id] for e in ranked] == [40, 30, 20, 10]


def test_equal_scores_keep_insertion_order():
    known, new = make_entries(2)
    scores = {known.transaction_id: 7, new.transaction_id: 7}

    should_update, ranked = rank_coinstakes([known, new], SEED, scored(scores))

    assert should_update is True
    assert ranked == [known, new]

    # The same holds when the newer entry comes first
    _, ranked = rank_coinstakes([new, known], SEED, scored(scores))

    assert ranked == [new, known]


def test_full_list_is_truncated():
    entries = list(make_entries(12))
    scores = {e.transaction_id: i for i, e in enumerate(entries)}

    # The new entry has the best score
    should_update, ranked = rank_coinstakes(entries, SEED, scored(scores))

    assert should_update is True
    assert len(ranked) == 11
    assert ranked[0] == entries[-1]
    assert entries[0] not in ranked


def test_new_entry_at_bottom_does_not_update():
    entries = list(make_entries(12))
    scores = {e.transaction_id: 100 - i for i, e in enumerate(entries)}

    should_update, ranked = rank_coinstakes(entries, SEED, scored(scores))

    assert should_update is False
    assert ranked == entries[:11]


def test_short_list_always_updates():
    # Even at the bottom, a new entry is kept while there is room
    entries = list(make_entries(5))
    scores = {e.transaction_id: 100 - i for i, e in enumerate(entries)}

    should_update, ranked = rank_coinstakes(entries, SEED, scored(scores))

    assert should_update is True
    assert ranked == entries


def test_real_scores_are_bounded():
    should_update, ranked = rank_coinstakes(list(make_entries(12)), SEED)

    assert len(ranked) == 11
    scores = [calculate_lottery_score(e.transaction_id, SEED) for e in ranked]
    assert scores == sorted(scores, reverse=True)
