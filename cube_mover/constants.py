from __future__ import annotations

# Cube defaults (used when remote loading is off or fails)
CUBE_SIZE: float = 1.0
CUBE_MOVE_STEP: float = 2.0
CUBE_MOVE_MAX: float = 3.0
LOAD_REMOTE: bool = True

# Remote sheet parameter names
PARAM_CUBE_SIZE: str = "cubeSize"
PARAM_CUBE_MOVE_STEP: str = "cubeMoveStep"
PARAM_CUBE_MOVE_MAX: str = "cubeMoveMax"

# Google Sheets CSV export
SHEET_EXPORT_ENDPOINT: str = "http://docs.google.com/feeds/download/spreadsheets/Export"
SHEET_DOCUMENT_ID: str = "1lW-uec71bgVSEwJCiRjxjYD4E3PDs70MKbErxqWent0"
SHEET_ID: str = "0"
SHEET_NAME_COLUMN: str = "name"
SHEET_VALUE_COLUMN: str = "value"

# Headless host
FRAME_DT: float = 1.0 / 60.0
