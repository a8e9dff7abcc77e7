import dataclasses

import pygame
import pytest

from spaceshooter import InputSnapshot, KeyState


def _down(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


def _up(key):
    return pygame.event.Event(pygame.KEYUP, key=key)


def test_nothing_held_by_default():
    assert KeyState().snapshot() == InputSnapshot()


def test_press_and_release():
    keys = KeyState()
    keys.handle_event(_down(pygame.K_LEFT))
    assert keys.snapshot().left
    keys.handle_event(_up(pygame.K_LEFT))
    assert not keys.snapshot().left


def test_alternate_bindings():
    keys = KeyState()
    keys.handle_event(_down(pygame.K_d))
    keys.handle_event(_down(pygame.K_SPACE))
    assert keys.snapshot() == InputSnapshot(left=False, right=True, fire=True)


def test_alias_release_keeps_other_key_held():
    keys = KeyState()
    keys.handle_event(_down(pygame.K_LEFT))
    keys.handle_event(_down(pygame.K_a))
    keys.handle_event(_up(pygame.K_a))
    assert keys.snapshot().left


def test_snapshot_is_frozen_and_detached():
    keys = KeyState()
    keys.handle_event(_down(pygame.K_SPACE))
    snap = keys.snapshot()
    keys.handle_event(_up(pygame.K_SPACE))
    assert snap.fire
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.fire = False


def test_unrelated_events_are_ignored():
    keys = KeyState()
    keys.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 0)))
    assert keys.snapshot() == InputSnapshot()
