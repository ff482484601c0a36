# neureset

This package simulates a neurofeedback treatment device. The device has
21 EEG sites. Each site records 60 samples in each of four bands:

| Band  | Range    |
|-------|----------|
| alpha | 8–12 Hz  |
| beta  | 12–30 Hz |
| delta | 1–4 Hz   |
| theta | 4–7 Hz   |

A session works like this:

1. The device takes a baseline frequency for each site. The baseline is the integer mean of the samples in the chosen band.
2. It gives four treatment rounds, one every 15 seconds. The rounds use offsets of 5, 10, 15 and 20 Hz.
3. During each round every site's baseline makes 16 random steps. Each step is within ±offset/5, and the baseline always stays between 0 and 40 Hz.

The package also simulates the following:
- a battery that runs down
- pausing and resuming a treatment
- losing and restoring contact with a site
- a log of the sessions that have finished

Time is simulated. All timers run on a shared `Clock`, and the clock moves only when you advance it. A full one-minute session therefore takes no real time.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command

```
neureset [--band {alpha,beta,delta,theta}] [--seed N] [--log-file PATH]
```

The command does the following:
1. It powers the device on.
2. It starts a new session on the chosen band. The default band is alpha.
3. It advances the clock past the one-minute treatment.
4. It powers the device off.
5. It prints the session log to standard output.

`--seed` makes the simulated signals repeatable. The log is also written to `--log-file`, which defaults to `Session_Log.txt`.

## Library use

### `neureset.events`

- **`Signal`** holds callbacks. It has `connect`, `disconnect` and `emit`. `disconnect` raises `ValueError` if the slot is not connected.
- **`Clock`** gives simulated milliseconds. `now()` returns the current time. `advance(ms)` fires the timers that fall due, in deadline order.
- **`Timer`** is either repeating or single-shot. Its `timeout` signal fires on a clock. It has `start(interval)`, `stop()` and `is_active()`.
- **`ElapsedTimer`** measures time that has passed on a clock. It has `start()`, `restart()` and `elapsed()`.

### `neureset.battery.Battery`

The battery starts at 100% and loses 10% every 15 seconds after `start_consumption()` is called.

It has these signals:
- `level_changed(level)` fires on every drain step.
- `low_battery_warning` fires when the level is at or below 20%.
- `depleted` fires at 0%. Draining then stops.

### `neureset.eeg_site`

**`Band`** is `ALPHA`, `BETA`, `DELTA` or `THETA`. `Band.from_name("beta")` picks the band by the first letter of the name. A name it does not recognise gives theta.

**`EEGSite`** has:
- `calculate_baseline(data)`
- `deliver_treatment(offset)`
- `disconnect()` and `reconnect()`, which emit `contact_lost(True/False)`
- `waveform(band)`, which returns a copy of the samples

### `neureset.controller.NeuresetController`

**Sites**
- `site(n)` returns the site numbered 1 to 21.
- `disconnect_site(n)` disconnects one site.
- `reconnect_sites()` reconnects all sites.

**Timing**
- `start_timer()`, `pause_timer()`, `resume_timer()` and `stop_timer()` control the session time.
- The controller emits `time_updated("mm:ss")` and `progress_updated(percent)` every second.
- If a pause lasts 5 seconds, the session ends and the `reset` signal fires.

**Sessions**
- `start_new_session(band)` takes the baselines and starts the rounds. It raises `RuntimeError` once 5 sessions have been logged.
- When all four rounds have finished, the controller emits `treatment_delivered(True)`.
- `session_log()` returns the text for every finished session, in this format:

  ```
  Session #1, At:dd/mm/yy hh:mm:ss AM
  EEG site #1: 10hz -> 12hz
  ...
  ```

**Charts**
- `generate_chart(site, band)` returns a `Chart` dataclass. It holds:
  - a title and 60 `(time, frequency)` points
  - axis ranges of 0–60 and 0–30
  - axis titles

### `neureset.device.Device`

`Device` is the front panel. It is connected to a controller and a battery. It keeps:
- `controls`, which says which buttons are enabled
- `indicators`, the colours of the treatment, contact and lost-contact lights
- the treatment time and progress
- the battery level and its warning text

Methods:
- `power_on()` and `power_off()` switch the device.
- `select_menu(item)` takes `"NEW SESSION"`, `"SESSION LOG"` or `"TIME AND DATE"`.
- `pause_treatment()`, `continue_treatment()` and `stop_treatment()` control a running treatment.
- `disconnect_site(n)` loses contact with a site and pauses the treatment. `connect_sites()` restores contact and resumes it.
- `set_date(datetime)` sets the device date.
- `eeg_chart(site, band)` returns the chart of a site's waveform.

Each action raises `RuntimeError` if its control is not enabled at that moment.

Other behaviour:
- When the device is created, it deletes the log file at `log_path`.
- When a session finishes, it writes the log of all sessions to `log_path`. The default is `Session_Log.txt`.
- It shows `"Low Battery!"` when the level is below 20%.
- It powers itself off when the battery runs out.

## What it does not do

There is no graphical window. The state of the front panel can only be read from `Device`. Waveform charts come back as `Chart` data and are not drawn.