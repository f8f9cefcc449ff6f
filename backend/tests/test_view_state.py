from client.view_state import PickerViewState


def _view(selected=(), max_id=10, page_size=3):
    view = PickerViewState(max_id=max_id, page_size=page_size)
    view.apply_server_state({"selectedOrder": list(selected), "extraIds": [], "maxId": max_id})
    return view


def test_left_view_puts_local_ids_first_and_deduplicates():
    view = _view(selected=[21])
    view.submit_new_id("30")
    view.submit_new_id(21)
    view.submit_new_id("31")
    view.apply_left_page(0, {"items": [1, 2, 30], "total": 12})

    items, total = view.left_view()
    assert items == [30, 31, 1, 2]
    # 21 is selected so it does not count
    assert total == 12 + 2


def test_left_view_applies_filter_to_local_ids():
    view = _view()
    view.submit_new_id(25)
    view.submit_new_id(31)
    view.set_left_filter("3")
    assert view.local_only_ids() == [31]


def test_submit_new_id_rejects_dense_and_invalid_input():
    view = _view()
    assert view.submit_new_id("5") is None
    assert view.submit_new_id("abc") is None
    assert view.submit_new_id(-20) is None
    assert view.submit_new_id("11") == 11
    assert view.submit_new_id(11) == 11
    assert view.local_extra_ids == [11]


def test_server_state_drops_acknowledged_local_ids():
    view = _view()
    view.submit_new_id(40)
    view.submit_new_id(50)
    view.apply_server_state({"selectedOrder": [], "extraIds": [40], "maxId": 10})
    assert view.local_extra_ids == [50]


def test_left_paging_appends_and_stops_at_total():
    view = _view()
    view.begin_left_load()
    view.apply_left_page(0, {"items": [1, 2, 3], "total": 5})
    assert view.request_next_left_page() == 1
    filter_text, offset, limit = view.begin_left_load()
    assert (filter_text, offset, limit) == ("", 3, 3)
    assert view.request_next_left_page() is None  # still loading
    view.apply_left_page(1, {"items": [4, 5], "total": 5})
    assert view.left_view() == ([1, 2, 3, 4, 5], 5)
    assert view.request_next_left_page() is None


def test_stale_left_results_are_ignored():
    view = _view()
    view.set_left_filter("1")
    assert not view.apply_left_page(0, {"items": [2], "total": 1}, filter_text="")
    assert not view.apply_left_page(4, {"items": [2], "total": 1})
    assert view.left_items == []


def test_filter_change_resets_left_paging():
    view = _view()
    view.apply_left_page(0, {"items": [1, 2, 3], "total": 10})
    view.request_next_left_page()
    view.set_left_filter("7")
    assert view.left_page == 0
    assert view.left_items == []
    assert view.left_total == 0


def test_selected_view_filters_and_grows_with_sentinel():
    view = _view(selected=[1, 10, 11, 12, 13, 2, 21], max_id=30)
    assert view.selected_view() == [1, 10, 11]
    assert view.on_right_sentinel_visible() == 6
    assert view.selected_view() == [1, 10, 11, 12, 13, 2]
    assert view.on_right_sentinel_visible() == 9
    assert view.on_right_sentinel_visible() == 9

    view.set_right_filter("1")
    assert view.right_visible_count == 3
    assert view.selected_view() == [1, 10, 11]
    view.on_right_sentinel_visible()
    assert view.selected_view() == [1, 10, 11, 12, 13, 21]


def test_add_remove_are_noops_when_nothing_changes():
    view = _view(selected=[1, 2])
    assert view.add_to_selected(2) is None
    assert view.remove_from_selected(9) is None
    assert view.add_to_selected(3) == [1, 2, 3]
    assert view.remove_from_selected(1) == [2, 3]


def test_move_selected_lands_before_target():
    view = _view(selected=[1, 2, 3, 4])
    assert view.move_selected(1, 3) == [2, 1, 3, 4]
    assert view.move_selected(4, 2) == [4, 2, 1, 3]
    assert view.move_selected(4, 4) is None
    assert view.move_selected(9, 1) is None


def test_edits_reset_paging_and_visible_count():
    view = _view(selected=[1, 2, 3, 4, 5])
    view.on_right_sentinel_visible()
    view.apply_left_page(0, {"items": [6], "total": 5})
    view.add_to_selected(6)
    assert view.right_visible_count == 3
    assert view.left_items == []


def test_local_edits_win_until_server_echoes_them():
    view = _view(selected=[1, 2])
    view.add_to_selected(3)

    # stale snapshot from before the flush
    assert not view.apply_server_state({"selectedOrder": [1, 2], "extraIds": [], "maxId": 10})
    assert view.selected_order == [1, 2, 3]

    # server caught up
    assert not view.apply_server_state({"selectedOrder": [1, 2, 3], "extraIds": [], "maxId": 10})
    assert view.unacknowledged_order is None

    # later change made elsewhere is adopted
    assert view.apply_server_state({"selectedOrder": [3], "extraIds": [], "maxId": 10})
    assert view.selected_order == [3]


def test_acknowledge_selection_clears_pending_overlay():
    view = _view(selected=[1])
    order = view.add_to_selected(2)
    view.acknowledge_selection([9])
    assert view.unacknowledged_order == [1, 2]
    view.acknowledge_selection(order)
    assert view.unacknowledged_order is None


def test_left_view_hides_ids_selected_since_the_page_loaded():
    view = _view()
    view.add_to_selected(2)
    view.apply_left_page(0, {"items": [1, 2, 3], "total": 10})
    assert view.left_view() == ([1, 3], 9)


def test_failed_page_is_requested_again():
    view = _view()
    view.begin_left_load()
    view.apply_left_page(0, {"items": [1, 2, 3], "total": 6})
    assert view.request_next_left_page() == 1
    view.begin_left_load()
    view.fail_left_load(1)
    assert view.left_page == 0
    assert view.request_next_left_page() == 1
    assert view.begin_left_load() == ("", 3, 3)
