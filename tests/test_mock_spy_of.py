# tests/test_mock_spy_of.py
import pytest

from pymocks import Mock, PropertyResolutionError


def test_none_when_method_never_set(backend):
    assert Mock(backend=backend).spy_of(lambda x: x.fighters) is None


def test_none_for_data_set_at_construction(backend):
    mock = Mock({"bar": ";-)"}, backend=backend)
    assert mock.spy_of(lambda x: x.bar) is None


def test_none_for_data_set_through_setup(backend):
    mock = Mock(backend=backend).setup(lambda x: x.bar).is_("plain")
    assert mock.spy_of(lambda x: x.bar) is None


def test_none_after_function_replaced_by_data(backend):
    mock = Mock({"fighters": lambda: True}, backend=backend)
    mock.extend({"fighters": "data now"})
    assert mock.spy_of(lambda x: x.fighters) is None


def test_current_spy_with_setup(backend):
    mock = Mock(backend=backend)
    mock.setup(lambda x: x.fighters).is_(lambda: True)
    spy = mock.spy_of(lambda x: x.fighters)

    assert mock.object.fighters() is True
    assert spy.call_count == 1


def test_current_spy_after_setup_multiple_times(backend):
    mock = Mock(backend=backend)
    mock.setup(lambda x: x.fighters).is_(lambda: True)
    mock.setup(lambda x: x.fighters).is_(lambda: False)
    spy = mock.spy_of(lambda x: x.fighters)

    assert mock.object.fighters() is False
    assert spy.call_count == 1


def test_current_spy_with_extend(backend):
    mock = Mock(backend=backend)
    mock.extend({"fighters": lambda: True})
    spy = mock.spy_of(lambda x: x.fighters)

    assert mock.object.fighters() is True
    assert spy.called


def test_current_spy_after_extend_multiple_times(backend):
    mock = Mock(backend=backend)
    mock.extend({"fighters": lambda: True})
    mock.extend({"fighters": lambda: False})
    spy = mock.spy_of(lambda x: x.fighters)

    assert mock.object.fighters() is False
    assert spy.call_count == 1


def test_current_spy_with_constructor(backend):
    mock = Mock({"fighters": lambda: True}, backend=backend)
    spy = mock.spy_of(lambda x: x.fighters)

    assert mock.object.fighters() is True
    assert spy.called


def test_current_spy_when_mixing_constructor_setup_extend(backend):
    mock = Mock({"fighters": lambda: True}, backend=backend)
    mock.setup(lambda x: x.fighters).is_(lambda: False)
    mock.extend({"fighters": lambda: True})

    spy = mock.spy_of(lambda x: x.fighters)

    assert mock.object.fighters() is True
    assert spy.called


def test_spy_of_right_after_setup_is_counts_one_call(backend):
    mock = Mock(backend=backend)
    mock.setup(lambda x: x.fighters).is_(lambda: 7)
    spy = mock.spy_of(lambda x: x.fighters)
    mock.object.fighters()
    assert spy.call_count == 1


def test_spy_of_uses_explicit_property_name(backend):
    mock = Mock({"fighters": lambda: True, "bar": "x"}, backend=backend)
    spy = mock.spy_of(lambda it: it.bar, "fighters")
    mock.object.fighters()
    assert spy.called


def test_spy_of_matches_setup_spy(backend):
    mock = Mock(backend=backend)
    setup = mock.setup(lambda x: x.fighters)
    assert mock.spy_of(lambda x: x.fighters) is setup.spy


def test_spy_of_with_bad_selector_raises(backend):
    with pytest.raises(PropertyResolutionError):
        Mock(backend=backend).spy_of(lambda x: x.a.b)
