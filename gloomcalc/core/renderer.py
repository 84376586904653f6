from abc import ABC, abstractmethod
from typing import Optional
from dataclasses import dataclass

from .renderable import RenderContext
from .input import InputEvent


@dataclass
class RendererConfig:
    width: int = 72
    title: str = "Gloomhaven Damage Calculator"
    subtitle: str = "Calculate damage distribution with Shield and Pierce mechanics"
    show_log: bool = True
    log_lines: int = 5
    use_color: bool = True


class Renderer(ABC):

    # Whether the breakdown should use the Unicode icon set
    unicode_icons: bool = True

    def __init__(self, config: Optional[RendererConfig] = None):
        self.config = config or RendererConfig()
        self._running = False

    @abstractmethod
    def initialize(self) -> None:
        pass

    @abstractmethod
    def cleanup(self) -> None:
        pass

    @abstractmethod
    def render_frame(self, context: RenderContext) -> None:
        pass

    @abstractmethod
    def get_input_events(self) -> list[InputEvent]:
        pass

    @abstractmethod
    def show_message(self, text: str) -> None:
        pass

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True
        self.initialize()

    def stop(self) -> None:
        self._running = False
        self.cleanup()
