"""Dark theme constants for the Dash app."""

BG = "#0f1419"        # page / plot background
PANEL = "#161b22"     # sidebar bg
BORDER = "#30363d"    # borders
MUTED = "#8b949e"     # axis text, threshold lines
TEXT = "#e6edf3"      # body text, point labels

ACCENT = "#58a6ff"    # selection outline
HIGHLIGHT = "#f2cc60" # search hit ring
PIN = "#ffffff"       # pinned outline
ERROR = "#f85149"
OK = "#3fb950"

FONT_STACK = '"JetBrains Mono", "Fira Code", "Cascadia Code", monospace'

SIDEBAR_WIDTH = "300px"
RIGHT_SIDEBAR_WIDTH = "280px"

# Nominal plot-area size in px, used to convert box selections to pixels.
PLOT_WIDTH_PX = 900
PLOT_HEIGHT_PX = 640
