"""Interface Tkinter principale."""

from __future__ import annotations

import asyncio
import logging
import tkinter as tk
from tkinter import ttk

import sv_ttk
from PIL import ImageTk

from logindemo.config import AppConfig
from logindemo.flow import (
    PASSWORD_FIELD,
    USERNAME_FIELD,
    Editing,
    LoginFlowController,
    LoginFlowState,
    Submitting,
)
from logindemo.services import Authenticator
from logindemo.state import AppState
from logindemo.ui.avatar import render_initial_badge

logger = logging.getLogger(__name__)

ACCENT_COLOR = "#2563EB"
STATUS_NEUTRAL_COLOR = "#6B7280"
STATUS_ERROR_COLOR = "#DC2626"
STATUS_SUCCESS_COLOR = "#16A34A"
PASSWORD_MASK = "•"
WINDOW_SIZE = "420x560"
BADGE_SIZE = 96
NOTIFICATION_DURATION_MS = 4000
UI_REFRESH_SECONDS = 1 / 60


class MainWindow:
    """Fenêtre principale : écran de connexion puis écran d'accueil."""

    def __init__(
        self,
        authenticator: Authenticator,
        config: AppConfig,
        state: AppState | None = None,
    ) -> None:
        self._authenticator = authenticator
        self._config = config
        self._state = state or AppState()
        self._controller: LoginFlowController | None = None
        self._unsubscribe = None
        self._logout_task: asyncio.Task[None] | None = None
        self._notification_after_id: str | None = None
        self._badge_photo: ImageTk.PhotoImage | None = None
        self._closed = False

        self.root = tk.Tk()
        self.root.title("Connexion")
        self.root.geometry(WINDOW_SIZE)
        self.root.minsize(360, 480)
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

        sv_ttk.set_theme(config.theme)
        self._configure_styles()

        self._username_var = tk.StringVar()
        self._password_var = tk.StringVar()
        self._show_password_var = tk.BooleanVar(value=False)
        self._username_error_var = tk.StringVar()
        self._password_error_var = tk.StringVar()
        self._notification_var = tk.StringVar()
        self._welcome_var = tk.StringVar()

        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)

        self._build_login_screen()
        self._build_welcome_screen()
        self._show_login_screen()

    # --------------------------------------------------------------------- UI -
    def _configure_styles(self) -> None:
        style = ttk.Style()
        style.configure("Title.TLabel", font=("Helvetica", 22, "bold"))
        style.configure(
            "Subtitle.TLabel",
            foreground=STATUS_NEUTRAL_COLOR,
            font=("Helvetica", 11),
        )
        style.configure(
            "FieldError.TLabel",
            foreground=STATUS_ERROR_COLOR,
            font=("Helvetica", 9),
        )
        style.configure(
            "Notification.TLabel",
            foreground=STATUS_ERROR_COLOR,
            font=("Helvetica", 10, "bold"),
        )
        style.configure("Success.TLabel", foreground=STATUS_SUCCESS_COLOR, font=("Helvetica", 40))
        style.configure("Accent.TButton", font=("Helvetica", 11, "bold"))
        style.configure("TButton", padding=(16, 8))
        self.root.option_add("*Font", "Helvetica 11")

    def _build_login_screen(self) -> None:
        frame = ttk.Frame(self.root, padding=(32, 24))
        frame.columnconfigure(0, weight=1)
        self._login_frame = frame

        ttk.Label(frame, text="🔒", style="Title.TLabel").grid(row=0, column=0, pady=(0, 12))
        ttk.Label(frame, text="Bienvenue", style="Title.TLabel").grid(row=1, column=0)
        ttk.Label(
            frame,
            text="Veuillez vous connecter pour continuer",
            style="Subtitle.TLabel",
        ).grid(row=2, column=0, pady=(4, 32))

        ttk.Label(frame, text="Nom d'utilisateur").grid(row=3, column=0, sticky="w")
        self._username_entry = ttk.Entry(frame, textvariable=self._username_var)
        self._username_entry.grid(row=4, column=0, sticky="ew", ipady=4)
        ttk.Label(
            frame,
            textvariable=self._username_error_var,
            style="FieldError.TLabel",
        ).grid(row=5, column=0, sticky="w", pady=(2, 12))

        ttk.Label(frame, text="Mot de passe").grid(row=6, column=0, sticky="w")
        self._password_entry = ttk.Entry(
            frame,
            textvariable=self._password_var,
            show=PASSWORD_MASK,
        )
        self._password_entry.grid(row=7, column=0, sticky="ew", ipady=4)
        ttk.Label(
            frame,
            textvariable=self._password_error_var,
            style="FieldError.TLabel",
        ).grid(row=8, column=0, sticky="w", pady=(2, 4))

        self._show_password_check = ttk.Checkbutton(
            frame,
            text="Afficher le mot de passe",
            variable=self._show_password_var,
            command=self._toggle_password_visibility,
        )
        self._show_password_check.grid(row=9, column=0, sticky="w", pady=(0, 24))

        self._login_button = ttk.Button(
            frame,
            text="Connexion",
            command=self.submit_login,
            style="Accent.TButton",
        )
        self._login_button.grid(row=10, column=0, sticky="ew")

        ttk.Label(
            frame,
            textvariable=self._notification_var,
            style="Notification.TLabel",
            wraplength=340,
            justify="center",
        ).grid(row=11, column=0, pady=(16, 0))

        self._username_entry.bind("<Return>", lambda _: self.submit_login())
        self._password_entry.bind("<Return>", lambda _: self.submit_login())

    def _build_welcome_screen(self) -> None:
        frame = ttk.Frame(self.root, padding=(32, 48))
        frame.columnconfigure(0, weight=1)
        self._welcome_frame = frame

        self._badge_label = ttk.Label(frame)
        self._badge_label.grid(row=0, column=0, pady=(0, 16))
        ttk.Label(frame, text="✔", style="Success.TLabel").grid(row=1, column=0)
        ttk.Label(frame, textvariable=self._welcome_var, style="Title.TLabel").grid(
            row=2, column=0, pady=(8, 4)
        )
        ttk.Label(
            frame,
            text="Vous êtes connecté avec succès",
            style="Subtitle.TLabel",
        ).grid(row=3, column=0, pady=(0, 32))

        self._logout_button = ttk.Button(
            frame,
            text="Déconnexion",
            command=self.logout,
        )
        self._logout_button.grid(row=4, column=0)

    def _toggle_password_visibility(self) -> None:
        self._password_entry.configure(show="" if self._show_password_var.get() else PASSWORD_MASK)

    # ------------------------------------------------------------- Navigation -
    def _show_login_screen(self) -> None:
        self._welcome_frame.grid_remove()
        self._password_var.set("")
        self._username_error_var.set("")
        self._password_error_var.set("")
        self._set_form_enabled(True)
        self._login_frame.grid(row=0, column=0, sticky="nsew")
        self._attach_controller()
        self._username_entry.focus()

    def _show_welcome_screen(self, username: str) -> None:
        self._login_frame.grid_remove()
        self._clear_notification()
        self._welcome_var.set(f"Bienvenue, {username} !")

        self._badge_photo = ImageTk.PhotoImage(render_initial_badge(username, BADGE_SIZE))
        self._badge_label.configure(image=self._badge_photo)
        self._logout_button.configure(state=tk.NORMAL)
        self._welcome_frame.grid(row=0, column=0, sticky="nsew")

    def _attach_controller(self) -> None:
        self._detach_controller()
        self._controller = LoginFlowController(
            self._authenticator,
            on_success=self._on_login_success,
            timeout=self._config.auth_timeout_seconds,
        )
        self._unsubscribe = self._controller.subscribe(self._render_state)

    def _detach_controller(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._controller is not None:
            self._controller.dispose()
            self._controller = None

    # --------------------------------------------------------------- Callbacks -
    def submit_login(self) -> None:
        controller = self._controller
        if controller is None:
            return

        controller.submit(self._username_var.get(), self._password_var.get())
        errors = controller.field_errors
        self._username_error_var.set(errors.get(USERNAME_FIELD, ""))
        self._password_error_var.set(errors.get(PASSWORD_FIELD, ""))

    def _render_state(self, state: LoginFlowState) -> None:
        if isinstance(state, Submitting):
            self._clear_notification()
            self._set_form_enabled(False)
        elif isinstance(state, Editing):
            self._set_form_enabled(True)
            if self._controller is not None:
                message = self._controller.consume_message()
                if message:
                    self._show_notification(message)

    def _on_login_success(self, username: str) -> None:
        self._state.sign_in(username)
        self._show_welcome_screen(username)

    def logout(self) -> None:
        """Déconnecte l'utilisateur puis revient à l'écran de connexion."""
        if not self._state.is_authenticated or self._logout_task is not None:
            return
        self._logout_button.configure(state=tk.DISABLED)
        self._logout_task = asyncio.get_running_loop().create_task(self._logout())

    async def _logout(self) -> None:
        try:
            await self._authenticator.logout()
        finally:
            self._logout_task = None
        if self._closed:
            return
        logger.info("User %s logged out", self._state.username)
        self._state.reset()
        self._show_login_screen()

    def _set_form_enabled(self, enabled: bool) -> None:
        state = tk.NORMAL if enabled else tk.DISABLED
        self._username_entry.configure(state=state)
        self._password_entry.configure(state=state)
        self._show_password_check.configure(state=state)
        self._login_button.configure(
            state=state,
            text="Connexion" if enabled else "Connexion en cours…",
        )

    def _show_notification(self, message: str) -> None:
        """Affiche un message transitoire ; seul le plus récent reste visible."""
        self._clear_notification()
        self._notification_var.set(message)
        self._notification_after_id = self.root.after(
            NOTIFICATION_DURATION_MS, self._clear_notification
        )

    def _clear_notification(self) -> None:
        if self._notification_after_id:
            try:
                self.root.after_cancel(self._notification_after_id)
            except ValueError:
                pass
            self._notification_after_id = None
        self._notification_var.set("")

    def _on_close(self) -> None:
        self._closed = True
        self._detach_controller()
        if self._logout_task is not None:
            self._logout_task.cancel()
        self.root.destroy()

    # ----------------------------------------------------------------- Public -
    def run(self) -> None:
        asyncio.run(self._run_async())

    async def _run_async(self) -> None:
        # Tk est pompé depuis la boucle asyncio pour partager un seul thread.
        while not self._closed:
            self.root.update()
            await asyncio.sleep(UI_REFRESH_SECONDS)
