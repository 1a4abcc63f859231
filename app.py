from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Optional

from rich.console import Group
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import (
    Button,
    Collapsible,
    Footer,
    Header,
    ProgressBar,
    Select,
    Static,
    TextArea,
)

import catalog
from backend import BackendError, HttpBackend, LocalBackend, SessionGateway
from config import Settings
from progress import ProgressTracker
from session import PracticeSession, Status
from stats import build_profile, format_session_date

logger = logging.getLogger(__name__)

TICK_S = 0.1
WELCOME_DELAY_S = 4.0

NAV_ITEMS = [
    ("home", "Home"),
    ("c", "C Language"),
    ("cpp", "C++"),
    ("python", "Python"),
    ("java", "Java"),
    ("javascript", "JavaScript"),
    ("practice", "Typing Practice"),
    ("profile", "Profile"),
]

TEXTUAL_THEMES = {"dark": "textual-dark", "light": "textual-light"}


@dataclass
class AppContext:
    settings: Settings
    client: Any
    gateway: SessionGateway
    user: Optional[dict] = None
    theme: str = "dark"
    current_page: str = "welcome"
    quote: str = field(default_factory=catalog.random_quote)

    @property
    def user_email(self) -> Optional[str]:
        return (self.user or {}).get("email")


class Sidebar(Vertical):
    def __init__(self, context: AppContext, page: str) -> None:
        super().__init__(id="sidebar")
        self.context = context
        self.page = page

    def compose(self) -> ComposeResult:
        yield Static("Learn Coding With Airy", id="brand")
        yield Static("Learn. Practice. Master.", id="brand-tagline")
        for key, title in NAV_ITEMS:
            yield Button(
                title,
                id=f"nav-{key}",
                classes="nav",
                variant="primary" if key == self.page else "default",
            )
        yield Static(f'"{escape(self.context.quote)}"', id="quote")
        theme_label = "Light Mode" if self.context.theme == "dark" else "Dark Mode"
        yield Button(theme_label, id="toggle-theme")
        yield Button("Logout", id="logout", variant="error")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button_id = event.button.id or ""
        if button_id.startswith("nav-"):
            self.app.navigate(button_id.removeprefix("nav-"))
        elif button_id == "toggle-theme":
            self.app.action_toggle_theme()
            label = "Light Mode" if self.context.theme == "dark" else "Dark Mode"
            event.button.label = label
        elif button_id == "logout":
            self.app.logout()


class PageScreen(Screen):
    """Screen wrapped in the layout shell (sidebar + scrolling content)."""

    page = "home"

    def __init__(self, context: AppContext) -> None:
        super().__init__()
        self.context = context

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="shell"):
            yield Sidebar(self.context, self.page)
            with VerticalScroll(id="content"):
                yield from self.compose_content()
        yield Footer()

    def compose_content(self) -> ComposeResult:
        yield from ()


class WelcomeScreen(Screen):
    def __init__(self, context: AppContext) -> None:
        super().__init__()
        self.context = context

    def compose(self) -> ComposeResult:
        name = (self.context.user or {}).get("full_name") or "there"
        with Vertical(id="welcome"):
            yield Static("✨", id="welcome-icon")
            yield Static(f"Welcome, {escape(name)}!", id="welcome-title")
            yield Static("Learn Coding With Airy", id="welcome-subtitle")
            yield Static("Learn. Practice. Master.", classes="muted")

    def on_mount(self) -> None:
        user = self.context.user
        if user is None or user.get("has_seen_welcome"):
            self.call_later(self.app.navigate, "home")
            return
        self.set_timer(WELCOME_DELAY_S, self._finish_welcome)

    def _finish_welcome(self) -> None:
        try:
            self.context.user = self.context.client.auth.update_me(has_seen_welcome=True) or self.context.user
        except BackendError:
            logger.exception("Error updating welcome status")
        self.app.navigate("home")


class HomeScreen(PageScreen):
    page = "home"

    FEATURES = [
        ("Interactive Learning", "Learn by doing with hands-on code examples"),
        ("Typing Practice", "Improve your coding speed and accuracy"),
        ("Structured Lessons", "From basics to advanced topics"),
        ("Track Progress", "Monitor your learning journey"),
    ]

    def compose_content(self) -> ComposeResult:
        yield Static("Learn Coding With Airy", classes="page-title")
        yield Static("Pick a language and start your journey.", classes="muted")
        with Vertical(id="languages"):
            for language in catalog.list_languages():
                yield Button(
                    f"{language.icon}  {language.name} - {language.tagline}",
                    id=f"lang-{language.key}",
                    classes="language-card",
                )
        yield Static("Why learn here?", classes="section-title")
        for title, description in self.FEATURES:
            yield Static(f"[b]{title}[/b]\n{description}", classes="feature")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("lang-"):
            self.app.navigate(button_id.removeprefix("lang-"))


class LessonsScreen(PageScreen):
    def __init__(self, context: AppContext, language: str) -> None:
        super().__init__(context)
        self.page = language
        self.language = catalog.get_language(language)
        self.lessons = catalog.lessons_for(language)
        self.tracker = ProgressTracker(context.client, language, context.user_email)

    def compose_content(self) -> ComposeResult:
        yield Static(f"{self.language.name} Programming", classes="page-title")
        yield Static(self.language.tagline, classes="muted")
        yield Static("0% Completed", id="completion")
        yield ProgressBar(total=100, show_eta=False, id="lesson-progress")
        for lesson in self.lessons:
            with Collapsible(title=self._card_title(lesson), id=f"card-{lesson.id}", classes="lesson-card"):
                yield Static(escape(lesson.description), classes="muted")
                yield Static("[b]Theory[/b]")
                yield Static(escape(lesson.theory))
                yield Static("[b]Code Example[/b]")
                yield Static(Syntax(lesson.code, self.language.key, line_numbers=False), classes="code")
                if lesson.output:
                    yield Static("[b]Output:[/b]")
                    yield Static(escape(lesson.output), classes="code")
                yield Button("Mark as Complete", id=f"complete-{lesson.id}", variant="success")

    def _card_title(self, lesson: catalog.Lesson) -> str:
        mark = "✔" if self.tracker.is_completed(lesson.id) else "○"
        return f"{mark} {lesson.title}"

    def on_mount(self) -> None:
        self.run_worker(self._load_progress, thread=True, exit_on_error=False)

    def _load_progress(self) -> None:
        self.tracker.load()
        self.app.call_from_thread(self._refresh_progress)

    def _refresh_progress(self) -> None:
        percent = self.tracker.completion_percentage(len(self.lessons))
        self.query_one("#completion", Static).update(f"{percent}% Completed")
        self.query_one("#lesson-progress", ProgressBar).update(progress=percent)
        for lesson in self.lessons:
            self.query_one(f"#card-{lesson.id}", Collapsible).title = self._card_title(lesson)
            done = self.tracker.is_completed(lesson.id)
            self.query_one(f"#complete-{lesson.id}", Button).display = not done

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("complete-"):
            lesson_id = button_id.removeprefix("complete-")
            self.run_worker(partial(self._mark_complete, lesson_id), thread=True, exit_on_error=False)

    def _mark_complete(self, lesson_id: str) -> None:
        if self.tracker.mark_complete(lesson_id):
            self.app.call_from_thread(self._refresh_progress)


class PracticeScreen(PageScreen):
    page = "practice"

    def __init__(self, context: AppContext) -> None:
        super().__init__(context)
        self.session = PracticeSession(
            user=context.user,
            gateway=context.gateway,
            dispatch=self._dispatch_save,
        )

    def compose_content(self) -> ComposeResult:
        yield Static("Typing Practice", classes="page-title")
        yield Static("Improve your coding speed and accuracy", classes="muted")
        with Horizontal(id="controls"):
            yield Select(
                [(language.name, language.key) for language in catalog.list_languages()],
                value=self.session.language,
                allow_blank=False,
                id="language",
            )
            yield Select(
                [(difficulty.title(), difficulty) for difficulty in catalog.DIFFICULTIES],
                value=self.session.difficulty,
                allow_blank=False,
                id="difficulty",
            )
            yield Button("Start", id="start", variant="success")
            yield Button("Reset", id="reset")
        with Horizontal(id="metrics"):
            yield Static("Time: 0s", id="time", classes="metric")
            yield Static("Accuracy: 0%", id="accuracy", classes="metric")
            yield Static("WPM: 0", id="wpm", classes="metric")
        yield Static("Type this code:", classes="section-title")
        yield Static("", id="target")
        yield Static("Your typing:", classes="section-title")
        yield TextArea("", id="typing-area", disabled=True)
        yield Static("", id="banner")

    def on_mount(self) -> None:
        self._refresh_view()
        self.set_interval(TICK_S, self._tick)

    def _dispatch_save(self, job) -> None:
        # App-level worker so leaving the page does not cancel the write.
        self.app.run_worker(job, thread=True, group="persist", exit_on_error=False)

    def _tick(self) -> None:
        if self.session.status is Status.ACTIVE:
            self.query_one("#time", Static).update(f"Time: {self.session.elapsed_seconds}s")
            self.query_one("#wpm", Static).update(f"WPM: {self.session.wpm}")

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.value is Select.BLANK:
            return
        language = self.query_one("#language", Select).value
        difficulty = self.query_one("#difficulty", Select).value
        if (language, difficulty) == (self.session.language, self.session.difficulty):
            return
        self.session.change_parameters(language, difficulty)
        self._clear_input()
        self._refresh_view()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "start":
            self.session.start()
            self._clear_input()
            area = self.query_one("#typing-area", TextArea)
            area.disabled = False
            area.focus()
            self._refresh_view()
        elif event.button.id == "reset":
            self.session.reset()
            self._clear_input()
            self._refresh_view()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.session.status is not Status.ACTIVE:
            return
        self.session.on_input(event.text_area.text)
        self._refresh_view()

    def _clear_input(self) -> None:
        area = self.query_one("#typing-area", TextArea)
        with area.prevent(TextArea.Changed):
            area.load_text("")

    def _refresh_view(self) -> None:
        session = self.session
        active = session.status is Status.ACTIVE
        complete = session.status is Status.COMPLETE

        self.query_one("#language", Select).disabled = active
        self.query_one("#difficulty", Select).disabled = active
        self.query_one("#start", Button).disabled = active
        area = self.query_one("#typing-area", TextArea)
        area.disabled = not active
        area.set_class(complete, "complete")

        self.query_one("#time", Static).update(f"Time: {session.elapsed_seconds}s")
        self.query_one("#accuracy", Static).update(f"Accuracy: {session.accuracy}%")
        self.query_one("#wpm", Static).update(f"WPM: {session.wpm}")
        self._update_target_text(session.user_input)

        banner = self.query_one("#banner", Static)
        if complete:
            banner.update(
                f"[b]Perfect![/b] You completed the challenge in {session.elapsed_seconds} seconds"
            )
            banner.display = True
        else:
            banner.display = False

    def _update_target_text(self, typed_text: str) -> None:
        target_text = self.session.snippet.text
        rendered = []
        for i, ch in enumerate(target_text):
            if i < len(typed_text):
                if typed_text[i] == ch:
                    rendered.append(f"[on #2f4f2f]{escape(ch)}[/]")
                else:
                    rendered.append(f"[on #4f2f2f]{escape(ch)}[/]")
            else:
                rendered.append(escape(ch))
        self.query_one("#target", Static).update("".join(rendered))


class ProfileScreen(PageScreen):
    page = "profile"

    def compose_content(self) -> ComposeResult:
        yield Static("My Profile", classes="page-title")
        yield Static("Track your progress and achievements", classes="muted")
        yield Static("", id="user-card")
        with Horizontal(id="stat-grid"):
            yield Static("", id="stat-time", classes="metric")
            yield Static("", id="stat-lessons", classes="metric")
            yield Static("", id="stat-accuracy", classes="metric")
            yield Static("", id="stat-wpm", classes="metric")
        yield Static("Recent Typing Sessions", classes="section-title")
        yield Static("Loading...", id="recent")

    def on_mount(self) -> None:
        self.run_worker(self._load_profile, thread=True, exit_on_error=False)

    def _load_profile(self) -> None:
        email = self.context.user_email
        sessions: list[dict] = []
        progress: list[dict] = []
        if email:
            try:
                sessions = self.context.client.entities.TypingSession.filter(
                    {"user_email": email}, "-created_date"
                )
                progress = self.context.client.entities.LearningProgress.filter({"user_email": email})
            except BackendError:
                logger.exception("Error loading profile data")
        summary = build_profile(self.context.user, sessions, progress)
        self.app.call_from_thread(self._show_profile, summary)

    def _show_profile(self, summary) -> None:
        self.query_one("#user-card", Static).update(
            f"[b]({summary.initial})  {escape(summary.full_name)}[/b]\n"
            f"{escape(summary.email)}\n"
            f"{summary.badge.icon} {summary.badge.label}    🔥 {summary.streak} Day Streak"
        )
        self.query_one("#stat-time", Static).update(f"Practice Time\n[b]{summary.practice_minutes}m[/b]")
        self.query_one("#stat-lessons", Static).update(f"Lessons Completed\n[b]{summary.completed_lessons}[/b]")
        self.query_one("#stat-accuracy", Static).update(f"Avg. Accuracy\n[b]{summary.accuracy_average}%[/b]")
        self.query_one("#stat-wpm", Static).update(f"Avg. WPM\n[b]{summary.average_wpm}[/b]")

        recent = self.query_one("#recent", Static)
        if not summary.recent_sessions:
            recent.update("No typing sessions yet. Start practicing to see your progress!")
            return

        table = Table(show_header=True, box=None, show_edge=False, pad_edge=False)
        table.add_column("Language", width=12, no_wrap=True)
        table.add_column("Date", width=14, no_wrap=True)
        table.add_column("WPM", justify="right", width=6, no_wrap=True)
        table.add_column("Accuracy", justify="right", width=10, no_wrap=True)
        table.add_column("Time", justify="right", width=8, no_wrap=True)
        for session in summary.recent_sessions:
            table.add_row(
                f"{session.get('language', '').upper()} - {session.get('difficulty', '')}",
                format_session_date(session.get("created_date") or ""),
                str(session.get("wpm", 0)),
                f"{session.get('accuracy', 0)}%",
                f"{session.get('time_seconds', 0)}s",
            )
        recent.update(Group(table))


class CodeTutorApp(App):
    CSS = """
    #shell {
        height: 1fr;
    }

    #sidebar {
        width: 30;
        padding: 1;
        border-right: solid $primary;
    }

    #brand {
        text-style: bold;
    }

    #brand-tagline, .muted {
        color: $text-muted;
    }

    #sidebar Button {
        width: 100%;
    }

    #quote {
        margin: 1 0;
        text-style: italic;
    }

    #content {
        padding: 1 2;
    }

    #welcome {
        align: center middle;
        content-align: center middle;
    }

    #welcome-title, .page-title {
        text-style: bold;
        margin-bottom: 1;
    }

    .section-title {
        text-style: bold;
        margin-top: 1;
    }

    .language-card {
        width: 100%;
        margin-bottom: 1;
    }

    .feature, .metric {
        border: solid $secondary;
        padding: 0 1;
        margin-right: 1;
    }

    .metric {
        width: 1fr;
    }

    #controls, #metrics, #stat-grid {
        height: auto;
        margin: 1 0;
    }

    #controls Select {
        width: 1fr;
    }

    #target, .code {
        border: solid $primary;
        padding: 1;
    }

    #typing-area {
        height: 14;
        border: solid $secondary;
    }

    #typing-area.complete {
        border: solid $success;
    }

    #banner {
        background: $success;
        padding: 1;
        margin-top: 1;
        content-align: center middle;
    }
    """

    TITLE = "Learn Coding With Airy"
    BINDINGS = [("ctrl+t", "toggle_theme", "Theme")]

    PAGES = {
        "home": HomeScreen,
        "practice": PracticeScreen,
        "profile": ProfileScreen,
    }

    def __init__(self, context: AppContext) -> None:
        super().__init__()
        self.context = context

    def on_mount(self) -> None:
        self.theme = TEXTUAL_THEMES[self.context.theme]
        try:
            self.context.user = self.context.client.auth.me()
        except BackendError:
            logger.exception("Error loading user")
            self.context.user = None
        self.push_screen(WelcomeScreen(self.context))

    def build_screen(self, page: str) -> Screen:
        if page in catalog.LANGUAGES:
            return LessonsScreen(self.context, page)
        return self.PAGES[page](self.context)

    def navigate(self, page: str) -> None:
        screen = self.build_screen(page)
        self.context.current_page = page
        self.switch_screen(screen)

    def action_toggle_theme(self) -> None:
        self.context.theme = "light" if self.context.theme == "dark" else "dark"
        self.theme = TEXTUAL_THEMES[self.context.theme]

    def logout(self) -> None:
        try:
            self.context.client.auth.logout()
        except BackendError:
            logger.exception("Error logging out")
        self.exit()


def make_client(settings: Settings):
    if settings.uses_remote_backend:
        return HttpBackend(settings.backend_url, settings.app_id, settings.api_key)
    return LocalBackend(settings.local_db_path)


def make_context(settings: Settings) -> AppContext:
    client = make_client(settings)
    return AppContext(
        settings=settings,
        client=client,
        gateway=SessionGateway(client),
        theme=settings.theme,
    )


def setup_logging(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.FileHandler(settings.log_path, encoding="utf-8")],
    )


def main() -> int:
    settings = Settings.load()
    setup_logging(settings)
    logger.info(
        "Starting with %s backend",
        "remote" if settings.uses_remote_backend else "local",
    )
    CodeTutorApp(make_context(settings)).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
