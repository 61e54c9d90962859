# confbus

confbus reads a directory of small typed configuration files. Each file
becomes an object on a message bus. A client can read an object's
configuration. It can also change any key that the configuration already has.

## Configuration files

Every file opens with a three-line meta section that names its kind. Each line
after that section holds one typed field:

```
--META--
Timeout
--------
Timeout int:5
TimeoutPhrase string:hello
```

A field is written as `<key> <type>:<value>`. The key is the first word on the
line. The type is `int` or `string`:

- An `int` must fit in a signed 32-bit integer.
- A `string` value is the first word after the colon. Anything after that word
  is ignored.

Every line after the meta section must be a field, so a blank line there is an
error.

The only kind at present is `Timeout`. When its service runs, a `Timeout`
object prints its `TimeoutPhrase` once every `Timeout` seconds. It stops when
either key is missing or has the wrong type.

Each file is served at `/com/system/configurationManager/Application/<name>`.
The `<name>` part is the file name with every `.` turned into `_`, so
`timeout.cfg` becomes `timeout_cfg`. Each object provides the interface
`com.system.configurationManager.Application.Configuration`, which has two
methods:

- `GetConfiguration` returns the configuration as a dict. It also emits a
  `ConfigurationChanged` signal that carries the same dict.
- `ChangeConfiguration(key, value)` sets an existing key to an `int` or a `str`.
  An unknown key raises `confbus.bus.BusError`.

The service takes the bus name `com.system.configurationManager`.

## Running

```
pip install .
confbus --config-dir data
```

The `confbus` command works in three steps:

1. It loads every regular file in the configuration directory, in sorted order.
   The default directory is `../data/`.
2. It starts each object's behaviour.
3. It enters the event loop and blocks until it is interrupted.

If any file fails to load, the command logs the failure and exits with status 1
without running anything.

## Library use

Read a single file:

```python
from confbus.reader import ConfigReader

with ConfigReader("data/timeout.cfg") as reader:
    kind = reader.read_meta()   # ConfigType.TIMEOUT
    fields = dict(reader)       # {"Timeout": 5, "TimeoutPhrase": "hello"}
```

Build a service and talk to its objects:

```python
from confbus.bus import Connection
from confbus.builder import ServiceBuilder, create_service, object_path_for
from confbus.objects import INTERFACE_NAME
from confbus.service import Service

connection = Connection()
builder = ServiceBuilder("data", Service(connection))
if create_service(builder):
    path = object_path_for("data/timeout.cfg")
    connection.call_method(path, INTERFACE_NAME, "ChangeConfiguration", "Timeout", 2)
    print(connection.call_method(path, INTERFACE_NAME, "GetConfiguration"))
```

`Connection.subscribe(handler)` receives every emitted `Signal`. It returns a
function that removes the subscription. `Service.run()` starts every object and
then blocks until `Connection.leave_event_loop()` is called.

The package is split into these parts:

- `confbus.reader`: `ConfigReader`, `ConfigType`, `parse_value`, `parse_field`,
  `create_reader`.
- `confbus.bus`: `Connection`, `BusError`, `Signal`, `validate_object_path`.
- `confbus.objects`: `DbusObject`, `TimeoutObject`.
- `confbus.service`: `Service`.
- `confbus.builder`: `DbusObjectBuilder`, `ServiceBuilder`, `create_service`,
  `object_path_for`.
- `confbus.manager`: `ServiceManager`, `main`.

Errors from reading and building are subclasses of
`confbus.exceptions.ConfigError`.

## What it does not do

The bus is `confbus.bus.Connection`, and it lives inside the running process.
confbus does not connect to a system or session message bus. Other processes
cannot see its objects or call their methods. Only code in the same process can
do so, and only that code can make the `confbus` command leave its event loop.
Otherwise the command runs until it is interrupted.

## Tests

```
pip install .[test]
pytest
```