from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import numpy as np
import pygame
import pygame.sndarray

from fry_stack.game import GameEvent

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050


@dataclass(frozen=True)
class Tone:
    wave: str
    start_hz: float
    end_hz: float
    seconds: float
    volume: float = 0.1


TONES: Dict[GameEvent, Tone] = {
    GameEvent.ROTATED: Tone("triangle", 600, 600, 0.10),
    GameEvent.LOCKED: Tone("sine", 200, 200, 0.15),
    GameEvent.CLEARED: Tone("square", 800, 1200, 0.15),
    GameEvent.GAME_OVER: Tone("sawtooth", 400, 100, 0.50),
}


def synthesize(tone: Tone, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Mono int16 samples for `tone` with an exponential fade-out."""
    n = max(1, int(tone.seconds * sample_rate))
    t = np.arange(n) / sample_rate
    freq = np.linspace(tone.start_hz, tone.end_hz, n)
    phase = 2 * np.pi * np.cumsum(freq) / sample_rate
    if tone.wave == "sine":
        wave = np.sin(phase)
    elif tone.wave == "square":
        wave = np.sign(np.sin(phase))
    elif tone.wave == "triangle":
        wave = 2 / np.pi * np.arcsin(np.sin(phase))
    elif tone.wave == "sawtooth":
        cycles = phase / (2 * np.pi)
        wave = 2 * (cycles - np.floor(cycles + 0.5))
    else:
        raise ValueError(f"unknown waveform '{tone.wave}'")
    # Gain falls from volume to 0.001 over the tone
    envelope = tone.volume * (0.001 / tone.volume) ** (t / tone.seconds)
    return (wave * envelope * 32767).astype(np.int16)


class SoundBoard:
    """Maps engine events to short synthesized sounds. Silent if no audio device."""

    def __init__(self, muted: bool = False) -> None:
        self.muted = muted
        self._sounds: Optional[Dict[GameEvent, pygame.mixer.Sound]] = None

    def _load(self) -> Dict[GameEvent, pygame.mixer.Sound]:
        if self._sounds is not None:
            return self._sounds
        self._sounds = {}
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            _, _, channels = pygame.mixer.get_init()
            for event, tone in TONES.items():
                samples = synthesize(tone)
                if channels > 1:
                    samples = np.repeat(samples[:, None], channels, axis=1)
                self._sounds[event] = pygame.sndarray.make_sound(np.ascontiguousarray(samples))
        except (pygame.error, NotImplementedError) as exc:
            logger.warning("audio disabled: %s", exc)
            self._sounds = {}
        return self._sounds

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        return self.muted

    def play(self, events: Iterable[GameEvent]) -> None:
        if self.muted:
            return
        sounds = self._load()
        for event in events:
            sound = sounds.get(event)
            if sound is not None:
                sound.play()
