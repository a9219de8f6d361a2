# elirtsi

A pure-Python client for the RTSI (real-time system interface) of Elite CS
series robot controllers. It speaks the RTSI wire protocol over TCP: it
negotiates the protocol version, reads the controller version, sets up input
and output recipes, and exchanges data packages with the controller.

There are no runtime dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Low-level client

`elirtsi.rtsi_client.RtsiClient` gives direct access to the protocol. It can
be used as a context manager, which disconnects on exit.

```python
from elirtsi.rtsi_client import RtsiClient

with RtsiClient(timeout=0.5) as client:
    client.connect("192.168.1.200", 30004)
    if client.negotiate_protocol_version(1):
        print(client.get_controller_version().to_string())

    outputs = client.setup_output_recipe(["timestamp", "actual_joint_positions"], 250)
    inputs = client.setup_input_recipe(["speed_slider_mask", "speed_slider_fraction"])
    client.start()

    if client.receive_data(outputs, False):
        print(outputs.get_value("actual_joint_positions"))

    inputs.set_value("speed_slider_mask", 1)
    inputs.set_value("speed_slider_fraction", 0.5)
    client.send(inputs)

    client.pause()
```

- `connect` raises `RtsiSocketError` for an invalid address or a failed
  connection; sending on a broken connection raises it too.
- `timeout` is the time in seconds allowed for each read of a message part.
  When it runs out the connection is dropped and the call returns its "nothing
  received" result (`False`, `-1`, or a version of zeros).
- `receive_data(recipe, read_newest)` fills one recipe; with `read_newest`
  every complete message already waiting is read, so the recipe holds the
  latest values.
- `receive_any(recipes, read_newest)` takes several recipes and returns the id
  of the one that was filled, or `-1`.
- `is_connected()`, `is_started()` and `is_read_available()` report the
  session state; `state` holds a `ConnectionState`.

## I/O interface

`elirtsi.rtsi_io.RtsiIOInterface` reads recipe lists from files (one variable
name per line), connects, starts a background thread that keeps the output
recipe up to date and sends changed inputs, and offers typed accessors:

```python
from elirtsi.rtsi_io import RtsiIOInterface

io = RtsiIOInterface("output_recipe.txt", "input_recipe.txt", 250, port=30004)
if io.connect("192.168.1.200"):
    print(io.get_robot_mode(), io.get_actual_joint_positions())
    io.set_standard_digital(0, True)
    io.set_speed_scaling(0.3)
    io.disconnect()
```

- `connect` returns `False` if version negotiation, recipe setup (an unknown
  variable type) or the start request fails, or if the first data package
  does not arrive.
- Getters return a zero default for variables not in either recipe. Enum
  getters such as `get_robot_mode` return a member of the matching enum from
  `elirtsi.datatypes`, or the raw integer if it names no member.
- Setters return `False` if the input recipe lacks the variable or the value
  does not fit its type.
- `read_recipe(path)` reads a recipe file; a missing or empty file raises
  `RecipeFileError`.

## Supporting modules

- `elirtsi.datatypes`: enums such as `RobotMode`, `JointMode`, `SafetyMode`,
  `ToolMode`, `TaskStatus` and `ControlMode`, and vector type aliases.
- `elirtsi.endian`: big-endian `pack`/`unpack`, `pack_array`/`unpack_array`
  and `split_string`.
- `elirtsi.version`: `VersionInfo` with `from_string`, `to_string` and
  ordering; `SDK_VERSION_INFO` is this package's version.
- `elirtsi.recipe`: `RtsiRecipe`, the typed variable table behind each recipe,
  with `RtsiType`, `RtsiRecipeError` and `UnknownVariableTypeError`.
- `elirtsi.robot_exception`: `RobotError` and `RobotRuntimeException` records.
- `elirtsi.log`: a small pluggable logger. Subclass `LogHandler` and pass an
  instance to `register_log_handler` to route messages elsewhere;
  `unregister_log_handler` restores the default handler, which prints to
  standard output, and `set_log_level` filters by `LogLevel`.

## What this package does not do

It only exchanges RTSI data. It does not move the robot: there is no servo,
speed or trajectory streaming, no script sending, no dashboard or primary-port
client. The `ControlMode`, `TrajectoryControlAction` and `FreedriveAction`
enums and the robot exception records are provided as data types only;
nothing in the package sends them or receives them from a controller.