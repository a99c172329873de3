from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pygame

from falling_blocks.game import Cue

# (frequency Hz, duration ms) per cue
TONES: Dict[Cue, Tuple[float, int]] = {
    Cue.MOVE: (220.0, 40),
    Cue.ROTATE: (330.0, 50),
    Cue.DROP: (110.0, 80),
    Cue.CLEAR: (660.0, 180),
    Cue.GAME_OVER: (82.0, 600),
}

# Opening phrase of the background theme as (frequency Hz, duration ms)
THEME: List[Tuple[float, int]] = [
    (659.3, 400), (493.9, 200), (523.3, 200), (587.3, 400), (523.3, 200), (493.9, 200),
    (440.0, 400), (440.0, 200), (523.3, 200), (659.3, 400), (587.3, 200), (523.3, 200),
    (493.9, 600), (523.3, 200), (587.3, 400), (659.3, 400),
    (523.3, 400), (440.0, 400), (440.0, 800),
]


def synth_tone(freq: float, duration_ms: int, sample_rate: int, channels: int, volume: float = 0.3) -> np.ndarray:
    n = max(1, int(sample_rate * duration_ms / 1000))
    t = np.arange(n) / float(sample_rate)
    # Short linear fade-out to avoid clicks
    envelope = np.linspace(1.0, 0.0, n)
    wave = np.sin(2.0 * np.pi * freq * t) * envelope * volume
    samples = (wave * 32767).astype(np.int16)
    if channels > 1:
        samples = np.repeat(samples[:, None], channels, axis=1)
    return np.ascontiguousarray(samples)


def synth_melody(notes: Sequence[Tuple[float, int]], sample_rate: int, channels: int, volume: float = 0.15) -> np.ndarray:
    parts = [synth_tone(freq, ms, sample_rate, channels, volume) for freq, ms in notes]
    return np.ascontiguousarray(np.concatenate(parts, axis=0))


class PygameAudio:
    """AudioSink that plays synthesized tones through pygame.mixer.

    Each cue is a short tone; the theme loops while the host reports a game
    in play and the sink is not muted.

    When the mixer cannot be initialized (no audio device) it stays silent.
    """

    def __init__(self, muted: bool = False, volume: float = 0.3) -> None:
        self.muted = muted
        self.volume = volume
        self._sounds: Dict[Cue, pygame.mixer.Sound] = {}
        self._theme: Optional[pygame.mixer.Sound] = None
        self.theme_playing = False
        self.available = self._init_mixer()

    def _init_mixer(self) -> bool:
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=22050, size=-16, channels=1)
            init = pygame.mixer.get_init()
        except pygame.error as exc:
            print(f"Audio disabled: {exc}")
            return False
        if init is None:
            return False
        rate, _size, channels = init
        for cue, (freq, ms) in TONES.items():
            self._sounds[cue] = pygame.sndarray.make_sound(synth_tone(freq, ms, rate, channels, self.volume))
        self._theme = pygame.sndarray.make_sound(synth_melody(THEME, rate, channels, self.volume / 2))
        return True

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        if self.muted and self.available:
            pygame.mixer.stop()
            self.theme_playing = False
        return self.muted

    def set_theme(self, playing: bool) -> None:
        """Loop the theme while `playing`; stop it otherwise."""
        want = bool(playing and not self.muted and self.available and self._theme is not None)
        if want == self.theme_playing:
            return
        if want:
            self._theme.play(loops=-1)
        elif self._theme is not None:
            self._theme.stop()
        self.theme_playing = want

    def play(self, cue: Cue) -> None:
        if self.muted or not self.available:
            return
        sound: Optional[pygame.mixer.Sound] = self._sounds.get(cue)
        if sound is not None:
            sound.play()
