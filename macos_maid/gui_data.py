from __future__ import annotations

MIN_WINDOW_WIDTH = 800
MIN_WINDOW_HEIGHT = 600
SIDEBAR_WIDTH = 220

SPACE_XS = 6
SPACE_SM = 10
SPACE_MD = 20
SPACE_LG = 30

FONT_TITLE = ("Helvetica", 30, "bold")
FONT_SECTION = ("Helvetica", 16, "bold")
FONT_BODY = ("Helvetica", 12)
FONT_META = ("Helvetica", 10)

THEME = {
    "bg": "#1e1f24",
    "panel": "#26282f",
    "panel_border": "#363945",
    "text": "#f2f3f5",
    "muted": "#9aa0ad",
    "accent": "#3d8bfd",
    "accent_hover": "#5a9dff",
    "accent_active": "#2a6fd6",
    "disabled_bg": "#3a3c44",
    "disabled_fg": "#6d717c",
    "good": "#34c759",
    "busy": "#ff9f0a",
    "sidebar_selected": "#33405a",
    "feature_blue": "#0a84ff",
    "feature_orange": "#ff9f0a",
    "feature_red": "#ff453a",
    "feature_gray": "#8e8e93",
}

TAB_ORDER = ("dashboard", "clean", "optimise", "privacy", "settings")

FEATURES = (
    {
        "tab": "clean",
        "title": "Cache & Junk",
        "description": "Clear temp files, logs, and app caches.",
        "color": "feature_blue",
    },
    {
        "tab": "optimise",
        "title": "System Speedup",
        "description": "Optimise settings and manage startup items.",
        "color": "feature_orange",
    },
    {
        "tab": "privacy",
        "title": "Privacy Guard",
        "description": "Secure browser history and app permissions.",
        "color": "feature_red",
    },
    {
        "tab": "settings",
        "title": "App Settings",
        "description": "Configure macOS Maid preferences.",
        "color": "feature_gray",
    },
)

TERMS_SECTION_COUNT = 7
TERMS_SECTION_BODY = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Sed do eiusmod tempor incididunt ut "
    "labore et dolore magna aliqua. Ut enim ad minim veniam, quis nostrud exercitation ullamco laboris "
    "nisi ut aliquip ex ea commodo consequat. Duis aute irure dolor in reprehenderit in voluptate velit "
    "esse cillum dolore eu fugiat nulla pariatur. Excepteur sint occaecat cupidatat non proident, sunt "
    "in culpa qui officia deserunt mollit anim id est laborum."
)

TEXTS = {
    "en": {
        "app_title": "macOS Maid",
        "welcome_subtitle": "Your Personal Mac Butler",
        "welcome_body": (
            "Effortlessly clean, optimise, and secure your Mac. "
            "Keep your system pristine and performing at its best."
        ),
        "welcome_button": "Get Started",
        "terms_title": "Terms of Service",
        "terms_subtitle": "Please review carefully before proceeding",
        "terms_section_heading": "Section {index}: Important Clause",
        "terms_scroll_hint": "Scroll Down",
        "terms_button": "Agree and Continue",
        "terms_helper_pending": "Scroll to the end to agree",
        "terms_helper_done": "Thank you!",
        "tab_dashboard": "Dashboard",
        "tab_clean": "Clean",
        "tab_optimise": "Optimise",
        "tab_privacy": "Privacy",
        "tab_settings": "Settings",
        "tab_title_clean": "Clean Tools",
        "tab_title_optimise": "Optimisation",
        "tab_title_privacy": "Privacy Settings",
        "tab_title_settings": "Application Settings",
        "tab_placeholder": "Detailed controls and information for this section will be available here.",
        "dashboard_title": "System Dashboard",
        "quick_scan_title": "Quick Scan",
        "quick_scan_body": "Perform a quick scan to check system health and find easy optimisations.",
        "quick_scan_button": "Start Quick Scan",
        "core_features_title": "Core Features",
        "help_title": "Help",
        "help_body": "macOS Maid is a preview. Scanning and cleanup are not available yet.",
    },
}


def terms_sections(language: str = "en") -> list[tuple[str, str]]:
    heading = TEXTS[language]["terms_section_heading"]
    return [
        (heading.format(index=index), TERMS_SECTION_BODY)
        for index in range(1, TERMS_SECTION_COUNT + 1)
    ]
