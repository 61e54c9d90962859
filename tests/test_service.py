from confbus.bus import BusError, Connection
from confbus.objects import DbusObject
from confbus.service import SERVICE_NAME, Service


class _RecordingObject(DbusObject):
    def __init__(self, connection, path):
        super().__init__(connection, path)
        self.started = 0

    def specific_behaviour(self):
        self.started += 1


class _FailingConnection(Connection):
    def enter_event_loop(self):
        raise BusError("org.example.Error", "loop failed")


def test_service_requests_its_name():
    connection = Connection()
    service = Service(connection)
    assert SERVICE_NAME in connection.names
    assert service.connection is connection


def test_default_connection_is_created():
    service = Service()
    assert SERVICE_NAME in service.connection.names


def test_add_object_keeps_order():
    connection = Connection()
    service = Service(connection)
    first = _RecordingObject(connection, "/a")
    second = _RecordingObject(connection, "/b")
    service.add_object(first)
    service.add_object(second)
    assert service.objects == [first, second]


def test_run_starts_every_object_and_returns_when_loop_left():
    connection = Connection()
    service = Service(connection)
    objs = [_RecordingObject(connection, f"/obj{i}") for i in range(3)]
    for obj in objs:
        service.add_object(obj)
    connection.leave_event_loop()
    service.run()
    assert [obj.started for obj in objs] == [1, 1, 1]


def test_run_swallows_bus_error_from_event_loop():
    connection = _FailingConnection()
    service = Service(connection)
    obj = _RecordingObject(connection, "/failing")
    service.add_object(obj)
    service.run()
    assert obj.started == 1