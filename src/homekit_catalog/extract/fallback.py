"""Static service -> characteristic mappings from the HAP specification.

Used when the metadata document is unavailable or yields no relationship
that matches the parsed headers. Keys are service display names; values are
``(required, optional)`` characteristic display names in specification order.
"""

from __future__ import annotations

_SENSOR_STATUS = ("Name", "StatusActive", "StatusFault", "StatusTampered", "StatusLowBattery")
_POSITION = ("CurrentPosition", "TargetPosition", "PositionState")

FALLBACK_MAPPINGS: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "Lightbulb": (
        ("PowerState",),
        ("Brightness", "Hue", "Saturation", "ColorTemperature", "Name"),
    ),
    "Switch": (("PowerState",), ("Name",)),
    "Outlet": (("PowerState", "OutletInUse"), ("Name",)),
    "Thermostat": (
        (
            "CurrentHeatingCooling",
            "TargetHeatingCooling",
            "CurrentTemperature",
            "TargetTemperature",
            "TemperatureUnits",
        ),
        (
            "CurrentRelativeHumidity",
            "TargetRelativeHumidity",
            "CoolingThreshold",
            "HeatingThreshold",
            "Name",
        ),
    ),
    "LockMechanism": (("CurrentLockMechanismState", "TargetLockMechanismState"), ("Name",)),
    "GarageDoorOpener": (
        ("CurrentDoorState", "TargetDoorState", "ObstructionDetected"),
        ("Name", "LockCurrentState", "LockTargetState"),
    ),
    "Fan": (
        ("Active",),
        (
            "CurrentFanState",
            "TargetFanState",
            "RotationDirection",
            "RotationSpeed",
            "SwingMode",
            "LockPhysicalControls",
            "Name",
        ),
    ),
    "TemperatureSensor": (("CurrentTemperature",), _SENSOR_STATUS),
    "MotionSensor": (("MotionDetected",), _SENSOR_STATUS),
    "ContactSensor": (("ContactState",), _SENSOR_STATUS),
    "SmokeSensor": (("SmokeDetected",), _SENSOR_STATUS),
    "LeakSensor": (("LeakDetected",), _SENSOR_STATUS),
    "HumiditySensor": (("CurrentRelativeHumidity",), _SENSOR_STATUS),
    "AirQualitySensor": (
        ("AirQuality",),
        (
            "OzoneDensity",
            "NitrogenDioxideDensity",
            "SulphurDioxideDensity",
            "PM2_5Density",
            "PM10Density",
            "VolatileOrganicCompoundDensity",
            "AirParticulateDensity",
            "AirParticulateSize",
            "CarbonMonoxideLevel",
            "CarbonDioxideLevel",
            *_SENSOR_STATUS,
        ),
    ),
    "Battery": (("BatteryLevel", "ChargingState", "StatusLowBattery"), ("Name",)),
    "Window": (_POSITION, ("HoldPosition", "ObstructionDetected", "Name")),
    "WindowCovering": (
        _POSITION,
        (
            "HoldPosition",
            "CurrentHorizontalTilt",
            "TargetHorizontalTilt",
            "CurrentVerticalTilt",
            "TargetVerticalTilt",
            "ObstructionDetected",
            "Name",
        ),
    ),
    "Door": (_POSITION, ("HoldPosition", "ObstructionDetected", "Name")),
    "Doorbell": (("InputEvent",), ("Brightness", "Volume", "Name")),
    "SecuritySystem": (
        ("CurrentSecuritySystemState", "TargetSecuritySystemState"),
        ("SecuritySystemAlarmType", "StatusFault", "StatusTampered", "Name"),
    ),
    "CarbonMonoxideSensor": (
        ("CarbonMonoxideDetected",),
        ("CarbonMonoxideLevel", "CarbonMonoxidePeakLevel", "BatteryLevel", *_SENSOR_STATUS),
    ),
    "CarbonDioxideSensor": (
        ("CarbonDioxideDetected",),
        ("CarbonDioxideLevel", "CarbonDioxidePeakLevel", *_SENSOR_STATUS),
    ),
    "OccupancySensor": (("OccupancyDetected",), _SENSOR_STATUS),
    "LightSensor": (("CurrentLightLevel",), _SENSOR_STATUS),
    "StatelessProgrammableSwitch": (("InputEvent",), ("Name",)),
    "StatefulProgrammableSwitch": (("InputEvent", "OutputState"), ("Name",)),
    "Microphone": (("Mute",), ("Volume", "Name")),
    "Speaker": (
        ("Mute",),
        ("Volume", "Active", "VolumeControlType", "VolumeSelector", "Name"),
    ),
    "HeaterCooler": (
        ("Active", "CurrentHeaterCoolerState", "TargetHeaterCoolerState", "CurrentTemperature"),
        (
            "LockPhysicalControls",
            "SwingMode",
            "CoolingThreshold",
            "HeatingThreshold",
            "TemperatureUnits",
            "RotationSpeed",
            "Name",
        ),
    ),
    "HumidifierDehumidifier": (
        (
            "Active",
            "CurrentHumidifierDehumidifierState",
            "TargetHumidifierDehumidifierState",
            "CurrentRelativeHumidity",
        ),
        (
            "LockPhysicalControls",
            "SwingMode",
            "WaterLevel",
            "HumidifierThreshold",
            "DehumidifierThreshold",
            "RotationSpeed",
            "Name",
        ),
    ),
    "Slats": (
        ("SlatType", "CurrentSlatState"),
        ("CurrentTilt", "TargetTilt", "SwingMode", "Name"),
    ),
    "FilterMaintenance": (
        ("FilterChangeIndication",),
        ("FilterLifeLevel", "FilterResetChangeIndication", "Name"),
    ),
    "AirPurifier": (
        ("Active", "CurrentAirPurifierState", "TargetAirPurifierState"),
        ("LockPhysicalControls", "SwingMode", "RotationSpeed", "Name"),
    ),
    "Valve": (
        ("Active", "InUse", "ValveType"),
        ("SetDuration", "RemainingDuration", "IsConfigured", "Name"),
    ),
    "IrrigationSystem": (
        ("Active", "ProgramMode", "InUse"),
        ("RemainingDuration", "StatusFault", "Name"),
    ),
    "Faucet": (("Active",), ("StatusFault", "Name")),
}


def fallback_mapping(service_name: str) -> tuple[list[str], list[str]] | None:
    """Return fresh ``(required, optional)`` lists for a service, if known."""
    mapping = FALLBACK_MAPPINGS.get(service_name)
    if mapping is None:
        return None
    required, optional = mapping
    return list(required), list(optional)
