"""Built-in clinical reference ranges.

One declarative record per metric kind, in the same shape accepted by
:meth:`RangeRegistry.from_records` and by JSON catalogs on disk.
"""

from __future__ import annotations

from typing import Any

# CHOLESTEROL_HDL, WEIGHT and HEIGHT intentionally carry no critical band.
DEFAULT_RANGE_RECORDS: tuple[dict[str, Any], ...] = (
    {"kind": "WEIGHT", "normal_min": 40, "normal_max": 150, "unit": "kg"},
    {"kind": "HEIGHT", "normal_min": 140, "normal_max": 220, "unit": "cm"},
    {"kind": "BMI", "normal_min": 18.5, "normal_max": 24.9,
     "critical_min": 16, "critical_max": 35, "unit": "kg/m²"},
    {"kind": "BLOOD_PRESSURE_SYSTOLIC", "normal_min": 90, "normal_max": 120,
     "critical_min": 70, "critical_max": 180, "unit": "mmHg"},
    {"kind": "BLOOD_PRESSURE_DIASTOLIC", "normal_min": 60, "normal_max": 80,
     "critical_min": 40, "critical_max": 120, "unit": "mmHg"},
    {"kind": "BLOOD_GLUCOSE_FASTING", "normal_min": 70, "normal_max": 100,
     "critical_min": 54, "critical_max": 200, "unit": "mg/dL"},
    {"kind": "BLOOD_GLUCOSE_RANDOM", "normal_min": 70, "normal_max": 140,
     "critical_min": 54, "critical_max": 250, "unit": "mg/dL"},
    {"kind": "BLOOD_GLUCOSE_POST_MEAL", "normal_min": 70, "normal_max": 140,
     "critical_min": 54, "critical_max": 250, "unit": "mg/dL"},
    {"kind": "TEMPERATURE", "normal_min": 36.1, "normal_max": 37.2,
     "critical_min": 35, "critical_max": 39.5, "unit": "°C"},
    {"kind": "OXYGEN_SATURATION", "normal_min": 95, "normal_max": 100,
     "critical_min": 85, "critical_max": 100, "unit": "%"},
    {"kind": "HEART_RATE", "normal_min": 60, "normal_max": 100,
     "critical_min": 40, "critical_max": 150, "unit": "bpm"},
    {"kind": "RESPIRATORY_RATE", "normal_min": 12, "normal_max": 20,
     "critical_min": 8, "critical_max": 30, "unit": "breaths/min"},
    {"kind": "CHOLESTEROL_TOTAL", "normal_min": 125, "normal_max": 200,
     "critical_min": 0, "critical_max": 300, "unit": "mg/dL"},
    {"kind": "CHOLESTEROL_LDL", "normal_min": 0, "normal_max": 100,
     "critical_min": 0, "critical_max": 190, "unit": "mg/dL"},
    {"kind": "CHOLESTEROL_HDL", "normal_min": 40, "normal_max": 100, "unit": "mg/dL"},
    {"kind": "TRIGLYCERIDES", "normal_min": 0, "normal_max": 150,
     "critical_min": 0, "critical_max": 500, "unit": "mg/dL"},
    {"kind": "HBA1C", "normal_min": 4, "normal_max": 5.7,
     "critical_min": 0, "critical_max": 10, "unit": "%"},
)
