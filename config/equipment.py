"""
config/equipment.py
───────────────────
Static equipment catalog and form layouts.

Brush holders are numbered 1–5 with an A and B brush each; every brush is
measured at three points across its face (inner / center / outer), giving
30 measurement points per carbon brush inspection.

ESP thermography covers three transformer sets per precipitator; each set has
the MCCB terminals and cooling components listed in ESP_TEMPERATURE_POINTS.
"""

# ── Carbon brush layout ───────────────────────────────────────────────────────
BRUSH_HOLDERS = ["1", "2", "3", "4", "5"]
BRUSH_SIDES = ["A", "B"]
BRUSH_FACES = ["inner", "center", "outer"]

BRUSH_POSITIONS: list[str] = [
    f"{holder}{side}_{face}"
    for holder in BRUSH_HOLDERS
    for side in BRUSH_SIDES
    for face in BRUSH_FACES
]

BRUSH_TYPES = ["C80X", "C80F", "EG34D", "EG98", "Other"]

# Brush reference dimensions (mm): H ≥ 25, B = 32, L = 50
BRUSH_REFERENCE = {"height_min": 25.0, "breadth": 32.0, "length": 50.0}

# ── Insulation test layout ────────────────────────────────────────────────────
PHASES = ["ug", "vg", "wg"]
PHASE_LABELS = {"ug": "U-G", "vg": "V-G", "wg": "W-G"}
WINDING_PAIRS = ["ry", "yb", "rb"]
WINDING_PAIR_LABELS = {"ry": "R-Y", "yb": "Y-B", "rb": "R-B"}

# ── ESP thermography layout ───────────────────────────────────────────────────
ESP_CODES = ["ESP-01", "ESP-02", "ESP-03", "ESP-04", "ESP-05"]
TRANSFORMERS = ["TF1", "TF2", "TF3"]

ESP_TEMPERATURE_POINTS: dict[str, str] = {
    "mccb_ic_r_phase": "MCCB I/C R-Phase",
    "mccb_ic_b_phase": "MCCB I/C B-Phase",
    "mccb_c_og1": "MCCB C O/G 1",
    "mccb_c_og2": "MCCB C O/G 2",
    "mccb_body_temp": "MCCB Body",
    "scr_cooling_fins_temp": "SCR Cooling Fins",
    "mcc_forced_cooling_fan_temp": "MCC Forced Cooling Fan",
}

LRS_POINT_SLOTS = 8

# ── Equipment types ───────────────────────────────────────────────────────────
EQUIPMENT_TYPES = [
    "Motor",
    "Motor 500v",
    "5kv motor",
    "Generator",
    "Transformer",
    "Pump",
    "Compressor",
    "Fan",
    "Conveyor",
    "Crusher",
    "Mill",
    "ESP - Transformer",
    "ESP - MCC Panel",
    "ESP - Control System",
    "Liquid Resistor Starter",
    "Contactor",
    "Cooler Fan",
    "General",
    "Other",
]

DEFAULT_EQUIPMENT_TYPE = "Motor"

# ── Demo catalog (seeded on first run) ────────────────────────────────────────
DEMO_EQUIPMENT: list[dict] = [
    {"tag_no": "BO.3161.04.M1", "equipment_name": "Induration Fan Motor",
     "equipment_type": "Motor", "location": "Induration Area"},
    {"tag_no": "BO.3161.05.M1", "equipment_name": "Cooling Fan Motor",
     "equipment_type": "Motor", "location": "Cooling Area"},
    {"tag_no": "BO.3161.06.M1", "equipment_name": "Exhaust Fan Motor",
     "equipment_type": "Motor", "location": "Exhaust Area"},
    {"tag_no": "ESP-01", "equipment_name": "ESP MCC Panel 1",
     "equipment_type": "ESP - MCC Panel", "location": "Main Plant"},
    {"tag_no": "ESP-02", "equipment_name": "ESP MCC Panel 2",
     "equipment_type": "ESP - MCC Panel", "location": "Main Plant"},
    {"tag_no": "ESP-03", "equipment_name": "ESP MCC Panel 3",
     "equipment_type": "ESP - MCC Panel", "location": "Secondary Plant"},
    {"tag_no": "LRS-01", "equipment_name": "Liquid Resistor Starter Unit 1",
     "equipment_type": "Liquid Resistor Starter", "location": "Main Plant"},
    {"tag_no": "LRS-02", "equipment_name": "Liquid Resistor Starter Unit 2",
     "equipment_type": "Liquid Resistor Starter", "location": "Main Plant"},
    {"tag_no": "CT-01", "equipment_name": "Main Contactor Unit 1",
     "equipment_type": "Contactor", "location": "Control Room"},
    {"tag_no": "CT-02", "equipment_name": "Backup Contactor Unit",
     "equipment_type": "Contactor", "location": "Control Room"},
    {"tag_no": "CF-01", "equipment_name": "Primary Cooler Fan",
     "equipment_type": "Cooler Fan", "location": "Cooling Section"},
    {"tag_no": "CF-02", "equipment_name": "Secondary Cooler Fan",
     "equipment_type": "Cooler Fan", "location": "Cooling Section"},
]

LRS_DEMO_POINTS: list[tuple[str, str]] = [
    ("P1", "Electrode terminal R"),
    ("P2", "Electrode terminal Y"),
    ("P3", "Electrode terminal B"),
    ("P4", "Main contactor"),
    ("P5", "Shorting contactor"),
    ("P6", "Cooler fan motor"),
]
