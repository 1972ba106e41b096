from apps.core.errorlog import ErrorLogService


def test_buffer_keeps_most_recent_entries():
    service = ErrorLogService(max_entries=3)
    for i in range(5):
        service.error(f"boom {i}")

    assert len(service) == 3
    assert [entry.message for entry in service.recent()] == ["boom 2", "boom 3", "boom 4"]


def test_unknown_level_is_recorded_as_error():
    service = ErrorLogService()
    entry = service.log("odd", level='fatal')
    assert entry.level == 'error'


def test_filter_by_level_and_clear():
    service = ErrorLogService()
    service.info("checkout opened")
    service.warning("slow image", url='/products')
    service.error("payment widget crashed", context={'orderId': 'abc'}, user_id='42')

    warnings = service.recent(level='warning')
    assert [entry.url for entry in warnings] == ['/products']

    error = service.recent(level='error')[0].to_dict()
    assert error['context'] == {'orderId': 'abc'}
    assert error['user_id'] == '42'
    assert error['timestamp']

    service.clear()
    assert service.recent() == []
