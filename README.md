# eontimer

A multi-stage countdown timer for RNG manipulation on handheld consoles.
You give it a target (a second, a delay, a frame or a number of advances).
It works out how long each countdown stage must run and counts the stages
down on a background thread. It signals a series of cues before each stage
ends. Afterwards it corrects its calibration from what you actually hit.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The command

```
eontimer [--settings PATH] [--tab {3,4,5,custom}] [--start]
```

- `--settings PATH`: the JSON settings file. The default is
  `~/.config/eontimer/settings.json`. The file is read at start-up if it
  exists, and it is written with every setting when the command ends.
- `--tab`: selects a timer and saves the choice. The choices are the
  fifth-generation timer (`5`), the fourth-generation timer (`4`), the
  third-generation timer (`3`), or `custom`, a single 10-second stage.
  Without this option the saved tab is used, and the fifth-generation
  timer if none has been saved.
- `--start`: runs the timer until it finishes or until Ctrl-C, then prints
  the remaining time of the current stage.

The command first prints the stages of the selected timer, then the
display lines:

```
Stages: 50:200
0:000
Minutes Before Target: 0
Next Stage: 0:000
```

Times are shown as `seconds:milliseconds`. A negative time is shown as
`?:???`.

## The timers

- **5** (`Gen5TimerMode`): Standard (one stage ending on a target second),
  C-Gear (target second, then target delay), Entralink, and Entralink+
  (which adds a third stage for target advances).
- **4**: a calibrated delay and second, with a target delay and second.
- **3**: a pre-timer followed by a target frame, with a calibration.

Timer settings (`eontimer.settings.TimerSettings`):

- the console, which fixes the frame rate (`Console`: GBA, NDS, NDS-GBA,
  DSI, 3DS);
- the refresh interval in milliseconds;
- whether precision calibration is on. When it is on, calibrations are kept
  in milliseconds and are not converted to delays.

Action settings (`eontimer.settings.ActionSettings`):

- the mode (`ActionMode`: Audio, Visual, A/V);
- the sound (`Sound`: Beep, Ding, Tick, Pop);
- the cue colour as an `(r, g, b)` tuple;
- the interval between cues in milliseconds;
- the number of cues.

Before a stage ends, `count` cues fire, spaced `interval` milliseconds
apart. The last cue falls on the end of the stage.

## Using it from Python

The `eontimer.app.Application` class connects the settings, the timer
models, the controllers and the timer service. It does the same things the
command does, and more:

```python
from eontimer.app import Application, Tab
from eontimer.settings import SettingsStore

app = Application(SettingsStore("settings.json"))
app.select_tab(Tab.GEN4)           # saves the tab and rebuilds the stages
print(app.timer_service.stages)    # stage lengths in milliseconds

app.toggle()                       # start; call again to stop
app.timer_service.wait()

app.gen4_model.delay_hit = 605     # what you actually hit
app.calibrate()                    # corrects the calibration and clears the hit
app.close()                        # stops the timer and saves every setting
```

`select_tab` and `calibrate` raise `RuntimeError` while the timer is
running. Changing a field of a timer model (`gen5_model`, `gen4_model`,
`gen3_model`) rebuilds the stages for that timer.

The stage calculations can also be used on their own:

```python
from eontimer.functions import to_minimum_length
from eontimer.timers import SecondTimer
from eontimer.app import format_time

to_minimum_length(5000)             # 65000: short stages are padded by whole minutes
SecondTimer().create_stage1(50, 0)  # 50200 ms to reach second 50
SecondTimer().calibrate(50, 51)     # -500: you were one second late
format_time(1500)                   # "1:500"
```

Other modules:

- `eontimer.timers`: `SecondTimer`, `DelayTimer`, `EntralinkTimer`,
  `EnhancedEntralinkTimer` and `FrameTimer`.
- `eontimer.calibration.CalibrationService`: converts between delays and
  milliseconds for the selected console.
- `eontimer.timer_service.TimerService`: runs a list of stages on a
  background thread. Its signals (`activated`, `action_triggered`,
  `state_changed`, `minutes_before_target_changed`, `next_stage_changed`)
  report its progress. `SoundService` plays the cue sound.
- `eontimer.controllers` and `eontimer.gen5_controller`: turn the timer
  models into stages and carry out their calibration.
- `eontimer.clock`: `Clock`, a microsecond tick clock, and
  `InstrumentationTimer`, which reports how long a `with` block took.
- `eontimer.models.Signal`: a minimal callback list used for change
  notification.

## What it does not do

- There is no windowed interface. The command only prints the stages and
  runs the timer. To enter the values you hit and calibrate, use the Python
  API (`Application.calibrate`).
- There are no separate sound files. By default every audio cue is the
  terminal bell, whichever sound is chosen. Pass `sound_player` to
  `Application`, or `player` to `SoundService`, to play something else.
- The visual cue is not drawn. It is only tracked as a flag on the display
  state (`app.display.active`), together with the configured colour.