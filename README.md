# volsurface

`volsurface` draws a live 3D implied-volatility surface for BTC options. It reads
the Deribit test exchange's websocket channel `markprice.options.btc_usd` and draws
the call and put surfaces again each time a new batch of mark prices arrives.

Each instrument name, for example `BTC-27JUN25-100000-C`, is split into underlying,
expiry, strike and side. Entries whose names cannot be decoded are skipped. Each option
then becomes one point:

- **x**: strike
- **y**: days from today (local date) until expiry
- **z**: implied volatility

For each side the latest value at every (strike, days to expiry) pair is kept, and a
newer value replaces an older one. The points are triangulated in the strike/expiry
plane with a Delaunay triangulation. Each axis is divided by its largest value, so a
surface with positive values fits in the unit cube. Red, green and blue lines from the
origin mark the strike, expiry and IV axes. Call surfaces are light blue and put
surfaces are orange. Faces are shaded by a light placed at the camera.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

```
volsurface
```

This opens an 800×600 matplotlib window and subscribes to the feed. The number of
options in each batch is printed. The surfaces keep updating until you close the
window. If the connection fails, or a message does not have the expected shape, the
error is printed as `Error: ...` and the window stays open without further updates.

You can choose which surfaces to draw with `--calls` and `--puts`. Each takes `true`
or `false`, and both default to `true`:

```
volsurface --calls true --puts false
volsurface --calls false --puts true
```

If both are `false`, the command prints an error and exits with status 1. Any value
other than `true` or `false` is rejected as a usage error.

## Library use

The parsing and mesh-building parts work without a window:

```python
from datetime import date

from volsurface.models import RawDeribitOption, OptionSide
from volsurface.plot import State

raw = RawDeribitOption(iv=55.2, instrument_name="BTC-27JUN25-100000-C")
full = raw.into_full()          # None if the name cannot be decoded
assert full.side is OptionSide.CALL

state = State()
state.update_state([full.into_data_point(today=date(2025, 1, 1))])
mesh = state.construct_mesh()
```

- `volsurface.models`: `OptionSide`, `RawDeribitOption` (with `from_dict` and
  `into_full`), `DeribitOptionStringObject.from_str` (raises `ValueError` on a
  malformed name), `FullDeribitOption.into_data_point(today=None)`, `DeribitDataPoint`,
  and `parse_message(text)`. `parse_message` decodes one websocket message into a list
  of `RawDeribitOption`. It returns `None` when the message has no `params`.
- `volsurface.plot`: `State` holds the points. `State.construct_mesh()` returns a `Mesh`
  with `positions` (an N×3 float32 array), `indices` (an M×3 uint16 array of triangles)
  and `triangle_count`. With fewer than three points, or with points all on one line,
  the mesh has positions but no triangles.
- `volsurface.websocket`: `subscribe_message()` returns the JSON-RPC subscription
  request. `listen_for_deribit_data(sink, url=...)` is a coroutine. It connects,
  subscribes, passes each batch of options to `sink`, and returns when the connection
  closes.
- `volsurface.render`: `SurfaceView` has `draw_axes()`, `show_mesh(side, mesh)`,
  `remove_mesh(side)`, `refresh()`, `is_open` and `sides_shown`.
- `volsurface.cli`: `Args`, `parse_args(argv)`, `points_for_side(raw_options, side, today)`
  and `main(argv=None)`.