from swimschool.services.realtime import ChangeEvent, ChangeFeed, ChangeKind, LiveQuery

def _doc(id_, created, status="PENDING", user="u1"):
    return {"id": id_, "createdAt": created, "paymentStatus": status, "userId": user}

def test_subscribe_filters_and_unsubscribes():
    feed = ChangeFeed()
    seen = []
    unsubscribe = feed.subscribe("enrollments", seen.append, where=lambda d: d["userId"] == "u1")

    feed.publish(ChangeEvent("enrollments", "a", ChangeKind.ADDED, _doc("a", "2025-01-01")))
    feed.publish(ChangeEvent("enrollments", "b", ChangeKind.ADDED, _doc("b", "2025-01-02", user="u2")))
    feed.publish(ChangeEvent("notifications", "n", ChangeKind.ADDED, {"id": "n"}))
    unsubscribe()
    feed.publish(ChangeEvent("enrollments", "c", ChangeKind.ADDED, _doc("c", "2025-01-03")))

    assert [e.id for e in seen] == ["a"]
    assert feed.listener_count("enrollments") == 0

def test_listener_errors_do_not_reach_the_writer(caplog):
    feed = ChangeFeed()
    seen = []

    def broken(event):
        raise RuntimeError("ui crashed")

    feed.subscribe("enrollments", broken)
    feed.subscribe("enrollments", seen.append)
    feed.publish(ChangeEvent("enrollments", "a", ChangeKind.ADDED, _doc("a", "2025-01-01")))

    assert [e.id for e in seen] == ["a"]
    assert any("Change listener failed" in r.getMessage() for r in caplog.records)

def test_live_query_keeps_sorted_filtered_snapshot():
    feed = ChangeFeed()
    snapshots = []
    live = LiveQuery(
        feed,
        "enrollments",
        snapshots.append,
        where=lambda d: d["paymentStatus"] == "PAID",
        initial=[_doc("a", "2025-01-01", "PAID"), _doc("b", "2025-01-05", "PENDING")],
    )
    assert [d["id"] for d in live.snapshot()] == ["a"]

    # entra no filtro
    feed.publish(ChangeEvent("enrollments", "b", ChangeKind.MODIFIED, _doc("b", "2025-01-05", "PAID")))
    assert [d["id"] for d in snapshots[-1]] == ["b", "a"]

    # sai do filtro
    feed.publish(ChangeEvent("enrollments", "a", ChangeKind.MODIFIED, _doc("a", "2025-01-01", "REJECTED")))
    assert [d["id"] for d in snapshots[-1]] == ["b"]

    # removido
    feed.publish(ChangeEvent("enrollments", "b", ChangeKind.REMOVED))
    assert snapshots[-1] == []

    # documento fora do filtro nunca gera snapshot
    count = len(snapshots)
    feed.publish(ChangeEvent("enrollments", "z", ChangeKind.ADDED, _doc("z", "2025-02-01", "PENDING")))
    assert len(snapshots) == count

    live.close()
    assert feed.listener_count("enrollments") == 0
