from __future__ import annotations

import queue
from pathlib import Path
from tkinter import (
    Canvas,
    END,
    Frame,
    Label,
    Scrollbar,
    Text,
    Tk,
    messagebox,
)
from typing import Callable

from .config import Settings, SettingsError, load_settings, write_default_settings
from .event_log import EventLogger
from .gui_data import (
    FEATURES,
    FONT_BODY,
    FONT_META,
    FONT_SECTION,
    FONT_TITLE,
    MIN_WINDOW_HEIGHT,
    MIN_WINDOW_WIDTH,
    SIDEBAR_WIDTH,
    SPACE_LG,
    SPACE_MD,
    SPACE_SM,
    SPACE_XS,
    TAB_ORDER,
    TEXTS,
    THEME,
    terms_sections,
)
from .gui_geometry import centered_window_position, resolve_min_window_size, scroll_edges_from_view
from .onboarding import GateNotSatisfied, OnboardingController, OnboardingStage, OnboardingUpdate
from .scan import SimulatedScan

DISPATCH_POLL_MS = 16
PROGRESS_BAR_HEIGHT = 8


class ActionButton(Label):
    def __init__(
        self,
        master,
        text: str,
        command,
        bg: str = THEME["accent"],
        fg: str = THEME["text"],
        hover_bg: str = THEME["accent_hover"],
        active_bg: str = THEME["accent_active"],
        enabled: bool = True,
    ):
        super().__init__(
            master,
            text=text,
            bg=bg,
            fg=fg,
            padx=14,
            pady=6,
            cursor="hand2",
            font=("Helvetica", 12, "bold"),
        )
        self._command = command
        self._default_bg = bg
        self._default_fg = fg
        self._hover_bg = hover_bg
        self._active_bg = active_bg
        self.enabled = True
        self.bind("<Enter>", self._on_enter)
        self.bind("<Leave>", self._on_leave)
        self.bind("<ButtonPress-1>", self._on_press)
        self.bind("<ButtonRelease-1>", self._on_release)
        self.set_enabled(enabled)

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled
        if enabled:
            self.config(bg=self._default_bg, fg=self._default_fg, cursor="hand2")
        else:
            self.config(bg=THEME["disabled_bg"], fg=THEME["disabled_fg"], cursor="arrow")

    def _on_enter(self, _event) -> None:
        if self.enabled:
            self.config(bg=self._hover_bg)

    def _on_leave(self, _event) -> None:
        if self.enabled:
            self.config(bg=self._default_bg)

    def _on_press(self, _event) -> None:
        if self.enabled:
            self.config(bg=self._active_bg)

    def _on_release(self, _event) -> None:
        if not self.enabled:
            return
        self.config(bg=self._hover_bg)
        self._command()


class MainThreadDispatcher:
    """Queue callbacks from any thread and run them from the Tk event loop."""

    def __init__(self, root):
        self.root = root
        self._pending: queue.Queue[Callable[[], None]] = queue.Queue()

    def __call__(self, callback: Callable[[], None]) -> None:
        self._pending.put(callback)

    def pump(self) -> None:
        try:
            while True:
                try:
                    callback = self._pending.get_nowait()
                except queue.Empty:
                    break
                callback()
        finally:
            self.root.after(DISPATCH_POLL_MS, self.pump)


class MaidWindow:
    def __init__(self, settings_path: Path, event_log_path: Path | None):
        self.settings_path = settings_path
        self.event_log = EventLogger(event_log_path)
        write_default_settings(settings_path, overwrite=False)
        self.settings = self._load_settings()
        self.language = self.settings.language
        self.selected_tab = "dashboard"
        self.root = Tk()
        self.root.configure(bg=THEME["bg"])
        self.root.title(self._t("app_title"))
        self.dispatcher = MainThreadDispatcher(self.root)
        self.controller = OnboardingController(
            tolerance=self.settings.scroll_tolerance,
            dispatch=self.dispatcher,
            on_event=self.event_log,
        )
        self.controller.subscribe(self._on_onboarding_update)
        self.scan = SimulatedScan(
            self.settings.scan_duration_sec,
            self.settings.scan_tick_sec,
            on_event=self.event_log,
        )
        self._set_window_geometry()
        self.container = Frame(self.root, bg=THEME["bg"])
        self.container.pack(fill="both", expand=True)
        self._render_stage()
        self.root.after(0, self.dispatcher.pump)

    def _load_settings(self) -> Settings:
        try:
            return load_settings(self.settings_path)
        except SettingsError:
            write_default_settings(self.settings_path, overwrite=True)
            return load_settings(self.settings_path)

    def _t(self, key: str) -> str:
        return TEXTS[self.language][key]

    def _set_window_geometry(self) -> None:
        screen_w = self.root.winfo_screenwidth()
        screen_h = self.root.winfo_screenheight()
        min_w, min_h = resolve_min_window_size(
            base_min_w=MIN_WINDOW_WIDTH,
            base_min_h=MIN_WINDOW_HEIGHT,
            screen_w=screen_w,
            screen_h=screen_h,
        )
        width = max(min_w, min(1000, int(screen_w * 0.8)))
        height = max(min_h, min(700, int(screen_h * 0.8)))
        x, y = centered_window_position(screen_w=screen_w, screen_h=screen_h, win_w=width, win_h=height)
        self.root.geometry(f"{width}x{height}+{x}+{y}")
        self.root.minsize(min_w, min_h)

    def _clear_container(self) -> None:
        for child in self.container.winfo_children():
            child.destroy()

    def _render_stage(self) -> None:
        self._clear_container()
        stage = self.controller.stage
        if stage is OnboardingStage.WELCOME:
            self._build_welcome()
        elif stage is OnboardingStage.TERMS:
            self._build_terms()
        else:
            self._build_main()

    def _on_onboarding_update(self, update: OnboardingUpdate) -> None:
        if update.direction is None:
            self._apply_terms_gate_state()
            return
        self._render_stage()

    # Welcome

    def _build_welcome(self) -> None:
        frame = Frame(self.container, bg=THEME["bg"])
        frame.place(relx=0.5, rely=0.5, anchor="center")
        Label(frame, text=self._t("app_title"), font=FONT_TITLE, bg=THEME["bg"], fg=THEME["text"]).pack()
        Label(
            frame,
            text=self._t("welcome_subtitle"),
            font=FONT_SECTION,
            bg=THEME["bg"],
            fg=THEME["muted"],
        ).pack(pady=(SPACE_XS, SPACE_MD))
        Label(
            frame,
            text=self._t("welcome_body"),
            font=FONT_BODY,
            bg=THEME["bg"],
            fg=THEME["muted"],
            wraplength=420,
            justify="center",
        ).pack(pady=(0, SPACE_LG))
        ActionButton(frame, self._t("welcome_button"), self.controller.request_advance_from_welcome).pack()

    # Terms

    def _build_terms(self) -> None:
        Label(
            self.container,
            text=self._t("terms_title"),
            font=FONT_TITLE,
            bg=THEME["bg"],
            fg=THEME["accent"],
        ).pack(pady=(SPACE_LG, 0))
        Label(
            self.container,
            text=self._t("terms_subtitle"),
            font=FONT_SECTION,
            bg=THEME["bg"],
            fg=THEME["muted"],
        ).pack(pady=(SPACE_XS, SPACE_MD))

        footer = Frame(self.container, bg=THEME["bg"])
        footer.pack(side="bottom", pady=(SPACE_MD, SPACE_LG))
        self.terms_button = ActionButton(
            footer,
            self._t("terms_button"),
            self.agree_and_continue,
            enabled=self.controller.has_reached_bottom,
        )
        self.terms_button.pack()
        self.terms_helper = Label(footer, font=FONT_META, bg=THEME["bg"])
        self.terms_helper.pack(pady=(SPACE_XS, 0))

        box = Frame(
            self.container,
            bg=THEME["panel"],
            highlightthickness=1,
            highlightbackground=THEME["panel_border"],
        )
        box.pack(fill="both", expand=True, padx=SPACE_LG + SPACE_SM)
        self.terms_scrollbar = Scrollbar(box)
        self.terms_scrollbar.pack(side="right", fill="y")
        self.terms_scroll_hint = Label(
            box,
            text=self._t("terms_scroll_hint") + " ↓",
            font=FONT_META,
            bg=THEME["panel_border"],
            fg=THEME["text"],
            padx=SPACE_SM,
        )
        self.terms_scroll_hint.place(relx=0.5, rely=1.0, anchor="s", y=-SPACE_SM)
        self.terms_text = Text(
            box,
            wrap="word",
            bg=THEME["panel"],
            fg=THEME["muted"],
            font=FONT_BODY,
            relief="flat",
            padx=SPACE_MD,
            pady=SPACE_MD,
            spacing3=4,
            yscrollcommand=self._on_terms_scrolled,
        )
        self.terms_text.pack(side="left", fill="both", expand=True)
        self.terms_scrollbar.config(command=self.terms_text.yview)
        self.terms_text.tag_configure("heading", font=FONT_SECTION, foreground=THEME["text"], spacing1=SPACE_SM)
        for heading, body in terms_sections(self.language):
            self.terms_text.insert(END, heading + "\n", "heading")
            self.terms_text.insert(END, body + "\n")
        self.terms_text.config(state="disabled")
        self.terms_scroll_hint.lift()
        self.terms_text.bind("<Configure>", self._on_terms_configure)
        self._apply_terms_gate_state()

    def _terms_scroll_edges(self, first: float, last: float) -> tuple[float, float]:
        viewport_h = max(self.terms_text.winfo_height(), 1)
        visible = last - first
        content_h = viewport_h / visible if visible > 0 else float(viewport_h)
        return scroll_edges_from_view(first=first, last=last, content_height=content_h)

    def _on_terms_scrolled(self, first, last) -> None:
        first, last = float(first), float(last)
        self.terms_scrollbar.set(first, last)
        # Unmapped text reports a 1px height; wait for the <Configure> pass.
        if self.terms_text.winfo_height() <= 1:
            return
        marker_bottom, viewport_bottom = self._terms_scroll_edges(first, last)
        self.controller.report_scroll_position(marker_bottom, viewport_bottom)

    def _on_terms_configure(self, _event=None) -> None:
        first, last = self.terms_text.yview()
        self._on_terms_scrolled(first, last)

    def _apply_terms_gate_state(self) -> None:
        if self.controller.stage is not OnboardingStage.TERMS:
            return
        done = self.controller.has_reached_bottom
        self.terms_button.set_enabled(done)
        self.terms_helper.config(
            text=self._t("terms_helper_done" if done else "terms_helper_pending"),
            fg=THEME["good"] if done else THEME["muted"],
        )
        if done:
            self.terms_scroll_hint.place_forget()

    def agree_and_continue(self) -> None:
        try:
            self.controller.request_advance_from_terms()
        except GateNotSatisfied:
            self._apply_terms_gate_state()

    # Main

    def _build_main(self) -> None:
        sidebar = Frame(self.container, bg=THEME["panel"], width=SIDEBAR_WIDTH)
        sidebar.pack(side="left", fill="y")
        sidebar.pack_propagate(False)
        Label(
            sidebar,
            text=self._t("app_title"),
            font=FONT_SECTION,
            bg=THEME["panel"],
            fg=THEME["text"],
        ).pack(anchor="w", padx=SPACE_MD, pady=(SPACE_MD, SPACE_MD))
        self.sidebar_buttons: dict[str, Label] = {}
        for tab in TAB_ORDER:
            button = Label(
                sidebar,
                text=self._t(f"tab_{tab}"),
                font=FONT_BODY,
                bg=THEME["panel"],
                fg=THEME["text"],
                anchor="w",
                padx=SPACE_MD,
                pady=SPACE_XS,
                cursor="hand2",
            )
            button.bind("<ButtonRelease-1>", lambda _event, name=tab: self.select_tab(name))
            if tab == "settings":
                button.pack(side="bottom", fill="x", pady=(0, SPACE_MD))
            else:
                button.pack(fill="x")
            self.sidebar_buttons[tab] = button

        main = Frame(self.container, bg=THEME["bg"])
        main.pack(side="left", fill="both", expand=True)
        status_bar = Frame(main, bg=THEME["bg"])
        status_bar.pack(fill="x", padx=SPACE_MD, pady=SPACE_SM)
        self.status_label = Label(status_bar, font=FONT_SECTION, bg=THEME["bg"])
        self.status_label.pack(side="left")
        help_button = Label(status_bar, text="?", font=FONT_SECTION, bg=THEME["bg"], fg=THEME["muted"], cursor="hand2")
        help_button.bind("<ButtonRelease-1>", lambda _event: self._show_info_dialog(self._t("help_title"), self._t("help_body")))
        help_button.pack(side="right")
        self.tab_content = Frame(main, bg=THEME["bg"])
        self.tab_content.pack(fill="both", expand=True)
        self._update_status()
        self.select_tab(self.selected_tab)

    def select_tab(self, tab: str) -> None:
        if tab not in TAB_ORDER:
            return
        self.selected_tab = tab
        for name, button in self.sidebar_buttons.items():
            button.config(bg=THEME["sidebar_selected"] if name == tab else THEME["panel"])
        for child in self.tab_content.winfo_children():
            child.destroy()
        if tab == "dashboard":
            self._build_dashboard()
        else:
            self._build_placeholder_tab(tab)

    def _build_placeholder_tab(self, tab: str) -> None:
        frame = Frame(self.tab_content, bg=THEME["bg"])
        frame.place(relx=0.5, rely=0.5, anchor="center")
        Label(
            frame,
            text=self._t(f"tab_title_{tab}"),
            font=FONT_TITLE,
            bg=THEME["bg"],
            fg=THEME["muted"],
        ).pack(pady=(0, SPACE_MD))
        Label(
            frame,
            text=self._t("tab_placeholder"),
            font=FONT_BODY,
            bg=THEME["bg"],
            fg=THEME["muted"],
            wraplength=420,
            justify="center",
        ).pack()

    def _build_dashboard(self) -> None:
        frame = Frame(self.tab_content, bg=THEME["bg"])
        frame.pack(fill="both", expand=True, padx=SPACE_LG, pady=SPACE_MD)
        Label(
            frame,
            text=self._t("dashboard_title"),
            font=FONT_TITLE,
            bg=THEME["bg"],
            fg=THEME["text"],
        ).pack(anchor="w", pady=(0, SPACE_MD))

        self.scan_card = Frame(
            frame,
            bg=THEME["panel"],
            highlightthickness=1,
            highlightbackground=THEME["panel_border"],
        )
        self.scan_card.pack(fill="x", pady=(0, SPACE_LG))
        self._render_scan_card()

        Label(
            frame,
            text=self._t("core_features_title"),
            font=FONT_SECTION,
            bg=THEME["bg"],
            fg=THEME["text"],
        ).pack(anchor="w", pady=(0, SPACE_SM))
        grid = Frame(frame, bg=THEME["bg"])
        grid.pack(fill="both", expand=True)
        grid.grid_columnconfigure(0, weight=1, uniform="features")
        grid.grid_columnconfigure(1, weight=1, uniform="features")
        for index, feature in enumerate(FEATURES):
            card = self._build_feature_card(grid, feature)
            card.grid(row=index // 2, column=index % 2, sticky="nsew", padx=SPACE_XS, pady=SPACE_XS)

    def _build_feature_card(self, parent, feature: dict[str, str]) -> Frame:
        card = Frame(
            parent,
            bg=THEME["panel"],
            highlightthickness=1,
            highlightbackground=THEME[feature["color"]],
            cursor="hand2",
        )
        title = Label(card, text=feature["title"], font=FONT_SECTION, bg=THEME["panel"], fg=THEME[feature["color"]])
        title.pack(anchor="w", padx=SPACE_MD, pady=(SPACE_MD, SPACE_XS))
        body = Label(
            card,
            text=feature["description"],
            font=FONT_BODY,
            bg=THEME["panel"],
            fg=THEME["muted"],
            wraplength=260,
            justify="left",
        )
        body.pack(anchor="w", padx=SPACE_MD, pady=(0, SPACE_MD))
        for widget in (card, title, body):
            widget.bind("<ButtonRelease-1>", lambda _event, name=feature["tab"]: self.select_tab(name))
        return card

    def _render_scan_card(self) -> None:
        for child in self.scan_card.winfo_children():
            child.destroy()
        Label(
            self.scan_card,
            text=self._t("quick_scan_title"),
            font=FONT_SECTION,
            bg=THEME["panel"],
            fg=THEME["text"],
        ).pack(anchor="w", padx=SPACE_MD, pady=(SPACE_MD, SPACE_SM))
        if self.scan.running:
            self.scan_progress = Canvas(
                self.scan_card,
                height=PROGRESS_BAR_HEIGHT,
                bg=THEME["panel_border"],
                highlightthickness=0,
            )
            self.scan_progress.pack(fill="x", padx=SPACE_MD)
            self.scan_progress_label = Label(self.scan_card, font=FONT_META, bg=THEME["panel"], fg=THEME["muted"])
            self.scan_progress_label.pack(pady=(SPACE_XS, SPACE_MD))
            self._draw_scan_progress()
            return
        Label(
            self.scan_card,
            text=self._t("quick_scan_body"),
            font=FONT_BODY,
            bg=THEME["panel"],
            fg=THEME["muted"],
        ).pack(anchor="w", padx=SPACE_MD)
        ActionButton(self.scan_card, self._t("quick_scan_button"), self.start_quick_scan).pack(
            anchor="w", padx=SPACE_MD, pady=(SPACE_SM, SPACE_MD)
        )

    def _draw_scan_progress(self) -> None:
        width = max(self.scan_progress.winfo_width(), 1)
        self.scan_progress.delete("all")
        self.scan_progress.create_rectangle(
            0, 0, int(width * self.scan.progress), PROGRESS_BAR_HEIGHT, fill=THEME["accent"], width=0
        )
        self.scan_progress_label.config(text=self.scan.progress_label())

    def _update_status(self) -> None:
        status = self.scan.status
        self.status_label.config(text=status.message, fg=THEME[status.tone])

    def start_quick_scan(self) -> None:
        if not self.scan.start():
            return
        self._update_status()
        self._render_scan_card()
        self.root.after(int(self.scan.tick_sec * 1000), self._scan_tick)

    def _scan_tick(self) -> None:
        self.scan.tick()
        on_dashboard = self.selected_tab == "dashboard"
        if self.scan.running:
            if on_dashboard:
                self._draw_scan_progress()
            self.root.after(int(self.scan.tick_sec * 1000), self._scan_tick)
            return
        self._update_status()
        if on_dashboard:
            self._render_scan_card()

    def _show_info_dialog(self, title: str, body: str) -> None:
        messagebox.showinfo(title, body, parent=self.root)

    def run(self) -> None:
        self.root.mainloop()


def launch_gui(settings_path: Path, event_log_path: Path | None) -> None:
    window = MaidWindow(settings_path, event_log_path)
    window.run()
