"""
config/status.py
────────────────
Status bands produced by the threshold classifier, with display configuration.
"""

from enum import Enum


class Band(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    NORMAL = "normal"
    ACCEPTABLE = "acceptable"
    WARNING = "warning"
    POOR = "poor"
    CRITICAL = "critical"


BAND_COLORS: dict[str, str] = {
    Band.EXCELLENT: "#2ea44f",
    Band.GOOD: "#2ea44f",
    Band.NORMAL: "#2ea44f",
    Band.ACCEPTABLE: "#e8a020",
    Band.WARNING: "#e8a020",
    Band.POOR: "#da3633",
    Band.CRITICAL: "#da3633",
}

BAND_BG: dict[str, str] = {
    Band.EXCELLENT: "rgba(46,164,79,0.12)",
    Band.GOOD: "rgba(46,164,79,0.12)",
    Band.NORMAL: "rgba(46,164,79,0.12)",
    Band.ACCEPTABLE: "rgba(232,160,32,0.12)",
    Band.WARNING: "rgba(232,160,32,0.12)",
    Band.POOR: "rgba(218,54,51,0.12)",
    Band.CRITICAL: "rgba(218,54,51,0.12)",
}

BAND_LABELS: dict[str, str] = {
    Band.EXCELLENT: "Excellent",
    Band.GOOD: "Good",
    Band.NORMAL: "Normal",
    Band.ACCEPTABLE: "Acceptable",
    Band.WARNING: "Warning",
    Band.POOR: "Poor",
    Band.CRITICAL: "Critical",
}

BAND_DESCRIPTIONS: dict[str, str] = {
    Band.EXCELLENT: "Insulation in excellent condition",
    Band.GOOD: "Within limits",
    Band.NORMAL: "Operating temperature normal",
    Band.ACCEPTABLE: "Above minimum, monitor at next inspection",
    Band.WARNING: "Approaching limit, schedule maintenance",
    Band.POOR: "Below minimum, investigate",
    Band.CRITICAL: "Action required",
}

UNDEFINED_LABEL = "N/A"
UNDEFINED_COLOR = "#8b949e"
