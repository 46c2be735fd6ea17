import logging

import customtkinter as ctk

from pastie.config import AppConfig
from pastie.controllers.app_controller import AppController
from pastie.models.image_list import ImageList
from pastie.ui.bottom_bar import BottomBar
from pastie.ui.console import Console
from pastie.ui.image_table import ImageTable
from pastie.ui.image_viewer import ImageViewer
from pastie.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)


class PastieApp(ctk.CTk):
    def __init__(self, config: AppConfig) -> None:
        super().__init__()
        ctk.set_appearance_mode(config.appearance_mode)
        ctk.set_default_color_theme(config.color_theme)

        self.title(config.window_title)
        self.minsize(*config.min_size)

        # root layout: viewer + table on the left, sidebar on the right, bars below
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=3)
        self.grid_rowconfigure(1, weight=1)
        self.grid_rowconfigure(2, weight=0)
        self.grid_rowconfigure(3, weight=0)

        self._model = ImageList(config)

        self._viewer = ImageViewer(self)
        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._table = ImageTable(self, self._model)
        self._table.grid(row=1, column=0, sticky="nsew", padx=(12, 6), pady=(0, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=1, rowspan=2, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self)
        self._bottom.grid(row=2, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 6))

        self._console = Console(self, max_lines=config.console_lines)
        self._console.grid(row=3, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))
        self._console.setup()

        self._controller = AppController(
            model=self._model,
            viewer=self._viewer,
            table=self._table,
            sidebar=self._sidebar,
            bottom=self._bottom,
            window=self,
            config=config,
        )
        self._controller.bind_events()
        self.protocol("WM_DELETE_WINDOW", self._on_close)
        logger.info("ready; accepting %s", ", ".join(config.allowed_extensions))

    @property
    def controller(self) -> AppController:
        return self._controller

    def _on_close(self) -> None:
        self._console.restore()
        self._model.clear()
        self.destroy()
