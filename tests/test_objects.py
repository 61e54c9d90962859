import io
import time

import pytest

from confbus.bus import BusError, Connection
from confbus.objects import INTERFACE_NAME, DbusObject, TimeoutObject

PATH = "/com/system/configurationManager/Application/test_conf"


class Recorder(DbusObject):
    def specific_behaviour(self):
        self.started = True


@pytest.fixture
def conn():
    return Connection()


def wait_for(predicate, limit=5.0):
    deadline = time.monotonic() + limit
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_base_is_abstract(conn):
    with pytest.raises(TypeError):
        DbusObject(conn, PATH)


def test_set_and_get_configuration(conn):
    obj = Recorder(conn, PATH)
    obj.set_configuration({"Timeout": 3, "TimeoutPhrase": "hi"})
    assert obj.get_configuration() == {"Timeout": 3, "TimeoutPhrase": "hi"}


def test_get_configuration_emits_signal(conn):
    obj = Recorder(conn, PATH)
    obj.set_configuration({"a": 1})
    signals = []
    conn.subscribe(signals.append)
    obj.get_configuration()
    assert len(signals) == 1
    assert signals[0].path == PATH
    assert signals[0].interface == INTERFACE_NAME
    assert signals[0].name == "ConfigurationChanged"
    assert signals[0].args == ({"a": 1},)


def test_change_configuration(conn):
    obj = Recorder(conn, PATH)
    obj.set_configuration({"a": 1})
    obj.change_configuration("a", "text")
    assert obj.get_configuration() == {"a": "text"}


def test_change_missing_key(conn):
    obj = Recorder(conn, PATH)
    obj.set_configuration({"a": 1})
    with pytest.raises(BusError) as info:
        obj.change_configuration("b", 2)
    assert info.value.name == "Configuration params error!"
    assert info.value.message == "Error : no such value by this key!"
    assert obj.get_configuration() == {"a": 1}


def test_change_unsupported_type(conn):
    obj = Recorder(conn, PATH)
    obj.set_configuration({"a": 1})
    with pytest.raises(BusError):
        obj.change_configuration("a", 1.5)
    assert obj.get_configuration() == {"a": 1}


def test_methods_over_bus(conn):
    obj = Recorder(conn, PATH)
    obj.set_configuration({"a": 1})
    conn.call_method(PATH, INTERFACE_NAME, "ChangeConfiguration", "a", 7)
    assert conn.call_method(PATH, INTERFACE_NAME, "GetConfiguration") == {"a": 7}


def test_set_configuration_copies(conn):
    obj = Recorder(conn, PATH)
    source = {"a": 1}
    obj.set_configuration(source)
    source["a"] = 2
    assert obj.get_configuration() == {"a": 1}


def test_close_unregisters(conn):
    with Recorder(conn, PATH) as obj:
        obj.set_configuration({"a": 1})
    with pytest.raises(BusError):
        conn.call_method(PATH, INTERFACE_NAME, "GetConfiguration")
    again = Recorder(conn, PATH)
    again.set_configuration({"b": 2})
    assert again.get_configuration() == {"b": 2}


def test_duplicate_path_rejected(conn):
    first = Recorder(conn, PATH)
    first.set_configuration({"a": 1})
    with pytest.raises(BusError):
        Recorder(conn, PATH)
    assert first.get_configuration() == {"a": 1}
    assert conn.call_method(PATH, INTERFACE_NAME, "GetConfiguration") == {"a": 1}


def test_timeout_prints_phrase(conn):
    out = io.StringIO()
    obj = TimeoutObject(conn, PATH, out)
    obj.set_configuration({"Timeout": 1, "TimeoutPhrase": "hello"})
    obj.specific_behaviour()
    assert wait_for(lambda: "hello\n" in out.getvalue())
    start = time.monotonic()
    obj.close()
    assert time.monotonic() - start < 2
    assert out.getvalue().splitlines()[0] == "hello"


@pytest.mark.parametrize(
    "conf",
    [
        {},
        {"Timeout": 1},
        {"TimeoutPhrase": "hello"},
        {"Timeout": "1", "TimeoutPhrase": "hello"},
        {"Timeout": 1, "TimeoutPhrase": 5},
    ],
)
def test_timeout_stops_on_bad_configuration(conn, conf):
    out = io.StringIO()
    obj = TimeoutObject(conn, PATH, out)
    obj.set_configuration(conf)
    obj.specific_behaviour()
    obj.close()
    assert out.getvalue() == ""


def test_timeout_behaviour_starts_once(conn):
    out = io.StringIO()
    obj = TimeoutObject(conn, PATH, out)
    obj.set_configuration({"Timeout": 5, "TimeoutPhrase": "once"})
    obj.specific_behaviour()
    obj.specific_behaviour()
    assert wait_for(lambda: "once" in out.getvalue())
    time.sleep(0.1)
    obj.close()
    assert out.getvalue().splitlines() == ["once"]


def test_timeout_close_without_start(conn):
    obj = TimeoutObject(conn, PATH, io.StringIO())
    obj.close()
    with pytest.raises(BusError):
        conn.call_method(PATH, INTERFACE_NAME, "GetConfiguration")