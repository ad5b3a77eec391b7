from speeddial.config import RegistrySettings
from speeddial.models import DirectoryStats, Entry
from speeddial.registry import (
    EVENT_ADDED,
    EVENT_DIRECTORY_ADDED,
    EVENT_REMOVED,
    Failure,
    InitState,
    SpeedDialRegistry,
)


def test_initialize_creates_named_directories(registry):
    names = registry.list_directory_names()
    assert names.ok
    assert names.value == [f'Directory {i}' for i in range(1, 6)]
    stats = registry.directory_stats().value
    assert all(s.capacity == 200 for s in stats)


def test_initialize_is_idempotent(registry):
    registry.add_number('Directory 1', 'home', '123')
    assert registry.initialize() is InitState.ALREADY_INITIALIZED
    assert registry.get_phone_number('Directory 1', 'home').value == '123'


def test_operations_fail_before_initialize():
    reg = SpeedDialRegistry()
    for outcome in (
        reg.add_number('Directory 1', 'home', '1'),
        reg.get_phone_number('Directory 1', 'home'),
        reg.remove_number('Directory 1', 'home'),
        reg.list_entries('Directory 1'),
        reg.list_directory_names(),
        reg.directory_stats(),
        reg.add_directory('Friends'),
    ):
        assert not outcome
        assert outcome.failure is Failure.NOT_INITIALIZED
    assert reg.initialize() is InitState.INITIALIZED


def test_concrete_scenario(registry):
    assert registry.add_number('Directory 1', 'home', '123-456-7890')
    assert registry.get_phone_number('Directory 1', 'home').value == '123-456-7890'

    duplicate = registry.add_number('Directory 1', 'home', '000')
    assert not duplicate
    assert duplicate.failure is Failure.DUPLICATE_CODE
    assert registry.get_phone_number('Directory 1', 'home').value == '123-456-7890'

    assert registry.remove_number('Directory 1', 'home')
    missing = registry.get_phone_number('Directory 1', 'home')
    assert not missing
    assert missing.failure is Failure.CODE_NOT_FOUND


def test_same_code_allowed_in_different_directories(registry):
    assert registry.add_number('Directory 1', 'home', '1')
    assert registry.add_number('Directory 2', 'home', '2')
    assert registry.get_phone_number('Directory 1', 'home').value == '1'
    assert registry.get_phone_number('Directory 2', 'home').value == '2'


def test_unknown_directory(registry):
    outcome = registry.add_number('Directory 6', 'test', '000-000-0000')
    assert outcome.failure is Failure.DIRECTORY_NOT_FOUND
    assert registry.get_phone_number('Directory 6', 'x').failure is Failure.DIRECTORY_NOT_FOUND
    assert registry.remove_number('Directory 6', 'x').failure is Failure.DIRECTORY_NOT_FOUND


def test_directory_full(small_registry):
    for i in range(3):
        assert small_registry.add_number('Directory 1', f'code{i}', str(i))
    overflow = small_registry.add_number('Directory 1', 'extra', '9')
    assert overflow.failure is Failure.DIRECTORY_FULL
    assert len(small_registry.list_entries('Directory 1').value) == 3
    assert small_registry.get_phone_number('Directory 1', 'extra').failure is Failure.CODE_NOT_FOUND


def test_full_directory_reports_full_before_duplicate(small_registry):
    for i in range(3):
        small_registry.add_number('Directory 1', f'code{i}', str(i))
    assert small_registry.add_number('Directory 1', 'code0', 'x').failure is Failure.DIRECTORY_FULL


def test_remove_frees_capacity(small_registry):
    for i in range(3):
        small_registry.add_number('Directory 1', f'code{i}', str(i))
    assert small_registry.remove_number('Directory 1', 'code1').value == '1'
    assert small_registry.add_number('Directory 1', 'code3', '3')


def test_remove_absent_code_leaves_state(registry):
    registry.add_number('Directory 1', 'work', '987')
    outcome = registry.remove_number('Directory 1', 'home')
    assert outcome.failure is Failure.CODE_NOT_FOUND
    assert registry.list_entries('Directory 1').value == [Entry('work', '987')]


def test_list_entries_sorted_by_code(registry):
    registry.add_number('Directory 1', 'work', '2')
    registry.add_number('Directory 1', 'home', '1')
    registry.add_number('Directory 1', 'mom', '3')
    codes = [e.code for e in registry.list_entries('Directory 1').value]
    assert codes == ['home', 'mom', 'work']


def test_list_entries_empty_is_not_missing(registry):
    empty = registry.list_entries('Directory 3')
    assert empty.ok
    assert empty.value == []
    missing = registry.list_entries('Nowhere')
    assert not missing
    assert missing.failure is Failure.DIRECTORY_NOT_FOUND


def test_number_and_code_truncated():
    reg = SpeedDialRegistry(RegistrySettings(max_code_length=4, max_number_length=5))
    reg.initialize()
    added = reg.add_number('Directory 1', 'office', '1234567890')
    assert added.value == Entry('offi', '12345')
    assert reg.get_phone_number('Directory 1', 'offi').value == '12345'
    # усечённый код совпадает с уже существующим
    assert reg.add_number('Directory 1', 'officer', '1').failure is Failure.DUPLICATE_CODE


def test_long_code_found_and_removed(registry):
    code = 'c' * 60
    assert registry.add_number('Directory 1', code, '123')
    assert registry.get_phone_number('Directory 1', code).value == '123'
    assert registry.remove_number('Directory 1', code).value == '123'
    assert registry.list_entries('Directory 1').value == []


def test_unlimited_lengths():
    reg = SpeedDialRegistry(RegistrySettings(max_code_length=None, max_number_length=None))
    reg.initialize()
    number = '1' * 100
    assert reg.add_number('Directory 1', 'c' * 80, number)
    assert reg.get_phone_number('Directory 1', 'c' * 80).value == number


def test_directory_stats(registry):
    registry.add_number('Directory 2', 'a', '1')
    stats = registry.directory_stats().value
    assert stats[1] == DirectoryStats(name='Directory 2', count=1, capacity=200)


def test_add_directory_unbounded_registry():
    reg = SpeedDialRegistry(RegistrySettings(max_directories=0, default_capacity=3))
    reg.initialize()
    assert reg.list_directory_names().value == []
    assert reg.add_directory('Family').value == 3
    assert reg.add_directory('Work', capacity=10).value == 10
    assert reg.add_directory('Family').failure is Failure.DIRECTORY_EXISTS
    assert reg.add_directory('Zero', capacity=0).failure is Failure.INVALID_CAPACITY
    assert reg.list_directory_names().value == ['Family', 'Work']


def test_add_directory_bounded_registry_full(registry):
    assert registry.add_directory('Directory 6').failure is Failure.REGISTRY_FULL
    assert registry.add_directory('Directory 1').failure is Failure.DIRECTORY_EXISTS


def test_observers_notified_after_mutation(registry):
    events = []
    registry.subscribe(events.append)
    registry.add_number('Directory 1', 'home', '1')
    registry.add_number('Directory 1', 'home', '2')
    registry.remove_number('Directory 1', 'home')
    registry.remove_number('Directory 1', 'home')
    assert [(e.kind, e.directory, e.code) for e in events] == [
        (EVENT_ADDED, 'Directory 1', 'home'),
        (EVENT_REMOVED, 'Directory 1', 'home'),
    ]
    registry.unsubscribe(events.append)
    registry.add_number('Directory 1', 'work', '3')
    assert len(events) == 2


def test_observer_sees_directory_added():
    reg = SpeedDialRegistry(RegistrySettings(max_directories=0))
    reg.initialize()
    events = []
    reg.subscribe(events.append)
    reg.add_directory('Family')
    assert events[0].kind == EVENT_DIRECTORY_ADDED
    assert events[0].directory == 'Family'
