"""
Poller: samples the selection buffers at a fixed cadence and feeds history.

Intended use:
    state = initial_state(config, load_history(config.history_path))
    run_daemon(config, reader, state=state)

Each cycle reads the sources in check order until one of them reports a
value different from its previous successful read (an empty buffer counts
as a read and clears that value; a timeout does not). That source supplies the
cycle's selection and moves to the end of the check order, so two buffers
that change constantly still take turns. The history is written to disk
only when the cycle actually changed it.

Failure policy:
- read timeouts are ordinary ReadResults, not errors;
- DisplayUnavailableError stops the loop and propagates to the caller;
- anything else is logged and the loop carries on with its previous state.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple

from .config import Config
from .errors import DisplayUnavailableError
from .history import History, append
from .persistence import save_history
from .sources import READ_TIMEOUT_S, ReadStatus, SelectionReader, Source

log = logging.getLogger(__name__)

POLL_INTERVAL_S = 0.5


@dataclass(frozen=True)
class SourceSlot:
    source: Source
    last: Optional[str] = None


@dataclass(frozen=True)
class PollerState:
    history: History
    slots: Tuple[SourceSlot, ...]


def configured_sources(config: Config) -> Tuple[Source, ...]:
    if config.use_primary_selection_as_input:
        return (Source.CLIPBOARD, Source.PRIMARY)
    return (Source.CLIPBOARD,)


def initial_state(config: Config, history: History = ()) -> PollerState:
    slots = tuple(SourceSlot(source) for source in configured_sources(config))
    return PollerState(history=history, slots=slots)


def scan_sources(reader: SelectionReader,
                 slots: Tuple[SourceSlot, ...]) -> Tuple[Tuple[SourceSlot, ...], Optional[str]]:
    """
    Read sources in order and stop at the first one whose value changed.

    Returns the check order for the next cycle and the new selection (None if
    nothing changed). Sources after the changed one are not read this cycle.
    """
    for index, slot in enumerate(slots):
        result = reader.read(slot.source, READ_TIMEOUT_S)
        if result.status is ReadStatus.EMPTY:
            # the next text in this buffer counts as new, even if seen before
            slots = slots[:index] + (replace(slot, last=None),) + slots[index + 1:]
            continue
        if not result.has_text or result.text == slot.last:
            continue
        log.debug("%s changed", slot.source.value)
        changed = replace(slot, last=result.text)
        rotated = slots[:index] + slots[index + 1:] + (changed,)
        return rotated, result.text
    return slots, None


def run_cycle(state: PollerState, reader: SelectionReader, config: Config) -> PollerState:
    slots, selection = scan_sources(reader, state.slots)
    history = state.history
    if selection is not None:
        history = append(selection, state.history, config.max_history_length)
        if history != state.history:
            log.debug("History updated (%d entries)", len(history))
            save_history(config.history_path, history)
    return PollerState(history=history, slots=slots)


def run_daemon(config: Config,
               reader: SelectionReader,
               state: Optional[PollerState] = None,
               sleep: Callable[[float], None] = time.sleep,
               cycles: Optional[int] = None) -> PollerState:
    """
    Poll forever (or for `cycles` iterations) and return the final state.

    Raises DisplayUnavailableError when the display goes away; this is the
    only way the loop ends on its own.
    """
    if state is None:
        state = initial_state(config)
    log.info("Polling %s every %.0f ms",
             ", ".join(slot.source.value for slot in state.slots), POLL_INTERVAL_S * 1000)

    done = 0
    while cycles is None or done < cycles:
        try:
            state = run_cycle(state, reader, config)
        except DisplayUnavailableError:
            log.error("Display went away, stopping")
            raise
        except Exception as e:
            log.exception("Poll cycle failed: %s", e)
        done += 1
        sleep(POLL_INTERVAL_S)
    return state
