import threading
from datetime import date

import pytest

from booking.database import RecordStore
from booking.errors import InvalidArgument, NotFound
from booking.models.ticket import Ticket
from booking.models.train import Train
from booking.models.user import User
from booking.services.train_catalog import TrainCatalog


def test_scenario_search_book_rebook(engine, catalog, make_train):
    t1 = make_train("T1", stations=("A", "B", "C"), seats=[[0, 0], [0, 0]])
    catalog.add(t1)

    assert catalog.search("A", "C") == [t1]
    assert engine.book_seat(t1, 0, 0) is True
    assert t1.seats == [[1, 0], [0, 0]]
    assert engine.book_seat(t1, 0, 0) is False
    assert t1.seats == [[1, 0], [0, 0]]
    assert engine.list_seats(t1) == [[1, 0], [0, 0]]
    with pytest.raises(NotFound):
        catalog.search("C", "A")


def test_book_seat_persists_through_catalog(engine, catalog, train_path, make_train):
    catalog.add(make_train("T1"))
    engine.book_seat(make_train("T1"), 1, 1)
    reloaded = TrainCatalog(RecordStore(train_path, Train))
    assert reloaded.find_by_id("T1").seats == [[0, 0], [0, 1]]


def test_book_seat_checks_current_grid_not_callers_copy(engine, catalog, make_train):
    catalog.add(make_train("T1"))
    stale = make_train("T1")
    assert engine.book_seat(make_train("T1"), 0, 1)
    assert engine.book_seat(stale, 0, 1) is False
    assert stale.seats == [[0, 0], [0, 0]]


def test_book_seat_on_unknown_train_adds_it(engine, catalog, make_train):
    assert engine.book_seat(make_train("T9"), 0, 0)
    assert catalog.find_by_id("T9").seats == [[1, 0], [0, 0]]


@pytest.mark.parametrize("row,col", [(2, 0), (0, 2), (-1, 0), (0, -1), (5, 5)])
@pytest.mark.parametrize("grid", [[[0, 0], [0, 0]], [[1, 1], [1, 1]]])
def test_book_seat_out_of_range_is_invalid(engine, catalog, make_train, row, col, grid):
    catalog.add(make_train("T1", seats=grid))
    with pytest.raises(InvalidArgument):
        engine.book_seat(make_train("T1", seats=grid), row, col)
    assert catalog.find_by_id("T1").seats == grid


def test_book_seat_ragged_rows(engine, catalog, make_train):
    catalog.add(make_train("T1", seats=[[0, 0, 0], [0]]))
    assert engine.book_seat(make_train("T1"), 0, 2)
    with pytest.raises(InvalidArgument):
        engine.book_seat(make_train("T1"), 1, 1)


def test_missing_train_is_invalid(engine):
    with pytest.raises(InvalidArgument):
        engine.book_seat(None, 0, 0)
    with pytest.raises(InvalidArgument):
        engine.list_seats(None)


def test_list_seats_is_a_snapshot(engine, catalog, make_train):
    catalog.add(make_train("T1"))
    seats = engine.list_seats(make_train("T1"))
    seats[0][0] = 1
    assert engine.list_seats(make_train("T1")) == [[0, 0], [0, 0]]


def test_concurrent_bookings_never_share_a_seat(engine, catalog, make_train):
    catalog.add(make_train("T1", seats=[[0]]))
    results = []
    barrier = threading.Barrier(8)

    def book():
        barrier.wait()
        results.append(engine.book_seat(make_train("T1", seats=[[0]]), 0, 0))

    threads = [threading.Thread(target=book) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(results) == [False] * 7 + [True]


def test_reserve_issues_ticket(engine, catalog, directory, alice, make_train):
    catalog.add(make_train("T1"))
    train = catalog.find_by_id("T1")

    ticket = engine.reserve(alice, train, 0, 1, "A", "C", date(2025, 4, 20))

    assert ticket.user_id == "u-alice"
    assert ticket.train.seats == [[0, 1], [0, 0]]
    assert [t.ticket_id for t in alice.tickets_booked] == [ticket.ticket_id]
    assert directory.find_by_id("u-alice").tickets_booked == [ticket]


def test_reserve_taken_seat_returns_none(engine, catalog, alice, make_train):
    catalog.add(make_train("T1", seats=[[1]]))
    assert engine.reserve(alice, catalog.find_by_id("T1"), 0, 0, "A", "B", date(2025, 4, 20)) is None
    assert alice.tickets_booked == []


def test_reserve_rejects_wrong_direction_and_unknown_user(engine, catalog, alice, make_train):
    catalog.add(make_train("T1"))
    train = catalog.find_by_id("T1")
    with pytest.raises(InvalidArgument):
        engine.reserve(alice, train, 0, 0, "C", "A", date(2025, 4, 20))
    with pytest.raises(InvalidArgument):
        engine.reserve(User(name="ghost", user_id="u-ghost"), train, 0, 0, "A", "C", date(2025, 4, 20))
    assert catalog.find_by_id("T1").seats == [[0, 0], [0, 0]]


def _ticket(ticket_id, train):
    return Ticket(
        ticket_id=ticket_id, user_id="u-alice", source="A", destination="C", date_of_travel=date(2025, 4, 20), train=train
    )


def test_cancel_booking_removes_exactly_that_ticket(engine, directory, alice, make_train):
    alice.tickets_booked = [_ticket("tk-1", make_train()), _ticket("tk-2", make_train()), _ticket("tk-3", make_train())]
    directory.update(alice)

    assert engine.cancel_booking(alice, "tk-2") is True
    assert [t.ticket_id for t in alice.tickets_booked] == ["tk-1", "tk-3"]
    assert [t.ticket_id for t in directory.find_by_id("u-alice").tickets_booked] == ["tk-1", "tk-3"]


def test_cancel_unknown_ticket_changes_nothing(engine, directory, alice, make_train):
    alice.tickets_booked = [_ticket("tk-1", make_train())]
    directory.update(alice)

    assert engine.cancel_booking(alice, "tk-404") is False
    assert [t.ticket_id for t in directory.find_by_id("u-alice").tickets_booked] == ["tk-1"]


def test_cancel_for_unknown_user_is_false(engine):
    assert engine.cancel_booking(User(name="ghost", user_id="u-ghost"), "tk-1") is False


@pytest.mark.parametrize("user,ticket_id", [(None, "tk-1"), (User(name="a", user_id="u"), ""), (User(name="a", user_id="u"), None)])
def test_cancel_with_missing_input_is_invalid(engine, user, ticket_id):
    with pytest.raises(InvalidArgument):
        engine.cancel_booking(user, ticket_id)


def test_reserve_then_cancel_round_trip(engine, catalog, directory, alice, make_train):
    catalog.add(make_train("T1"))
    ticket = engine.reserve(alice, catalog.find_by_id("T1"), 1, 0, "A", "B", date(2025, 5, 1))
    assert engine.cancel_booking(alice, ticket.ticket_id)
    assert directory.fetch_bookings(User(name="alice", user_id="", password="s3cret")) == []
