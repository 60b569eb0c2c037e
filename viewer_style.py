# viewer_style.py — colors and fonts shared by the viewer windows

BG_MAIN = "#f0f2f5"
BG_TOOLBAR = "#2c3e50"
BG_PANEL = "#ffffff"
BG_BUTTON = "#3d5a80"
FG_BUTTON = "#ffffff"
FG_TEXT = "#1f2933"
FG_SUBTEXT = "#52606d"

FONT_HEADER = ("Segoe UI", 11, "bold")
FONT_TEXT = ("Segoe UI", 10)
FONT_MONO = ("Consolas", 10)
FONT_BUTTON = ("Segoe UI", 10, "bold")

HISTOGRAM_COLOR_8 = "gray"
HISTOGRAM_COLOR_24 = "#e0a800"
