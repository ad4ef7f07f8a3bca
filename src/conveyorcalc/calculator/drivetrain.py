"""
Drivetrain sub-calculator: belt speed, shaft RPM and ratio chain.

    drive RPM   = belt speed / (π × D / 12)
    belt speed  = drive RPM × π × D / 12            (FPM, D in inches)
    gear ratio  = motor RPM / drive RPM
    chain ratio = driven teeth / driver teeth       (1 when shaft mounted)
    gearmotor output RPM = drive RPM × chain ratio
    total drive ratio    = gear ratio × chain ratio

All functions return nan rather than raising when a quantity can't be
computed.
"""

from dataclasses import dataclass
from math import pi
from typing import Optional, Tuple

from .numeric import NAN, is_number, num, safe_div

# Actual belt speed warning codes
ACTUAL_GM_RPM_INVALID = "ACTUAL_GM_RPM_INVALID"
PULLEY_DIAMETER_MISSING = "PULLEY_DIAMETER_MISSING"
SPROCKET_TEETH_MISSING = "SPROCKET_TEETH_MISSING"


@dataclass
class DrivetrainResult:
    """Speed and ratio chain for one configuration."""
    drive_rpm: float
    belt_speed_fpm: float
    gear_ratio: float
    chain_ratio: float
    gearmotor_output_rpm: float
    total_drive_ratio: float


def pulley_circumference_ft(pulley_diameter_in: Optional[float]) -> float:
    """Belt travel per drive pulley revolution, in feet."""
    return pi * num(pulley_diameter_in) / 12.0


def calculate_drive_rpm(belt_speed_fpm: Optional[float], pulley_diameter_in: Optional[float]) -> float:
    """Drive shaft RPM needed for a belt speed."""
    return safe_div(num(belt_speed_fpm), pulley_circumference_ft(pulley_diameter_in))


def calculate_belt_speed(drive_rpm: Optional[float], pulley_diameter_in: Optional[float]) -> float:
    """Belt speed (FPM) produced by a drive shaft RPM."""
    return num(drive_rpm) * pulley_circumference_ft(pulley_diameter_in)


def calculate_gear_ratio(motor_rpm: float, drive_rpm: float) -> float:
    return safe_div(num(motor_rpm), num(drive_rpm))


def calculate_chain_ratio(
    gm_sprocket_teeth: Optional[float],
    drive_shaft_sprocket_teeth: Optional[float],
    is_bottom_mount: bool,
) -> float:
    """
    Chain stage ratio, driven ÷ driver.

    Shaft-mounted gearmotors have no chain stage, so the ratio is 1.
    """
    if not is_bottom_mount:
        return 1.0
    driver = num(gm_sprocket_teeth)
    driven = num(drive_shaft_sprocket_teeth)
    if not driver > 0 or not driven > 0:
        return NAN
    return driven / driver


def calculate_drivetrain(
    belt_speed_fpm: Optional[float],
    drive_rpm: Optional[float],
    pulley_diameter_in: Optional[float],
    motor_rpm: float,
    chain_ratio: float,
) -> DrivetrainResult:
    """
    Resolve the full ratio chain from whichever speed the user entered.

    Exactly one of belt_speed_fpm / drive_rpm is expected; the other is
    derived through the drive pulley circumference.

    Args:
        belt_speed_fpm: Entered belt speed (belt-speed mode), else None
        drive_rpm: Entered drive shaft RPM (drive-RPM mode), else None
        pulley_diameter_in: Drive pulley diameter
        motor_rpm: Motor nameplate RPM
        chain_ratio: From calculate_chain_ratio()

    Returns:
        DrivetrainResult
    """
    if drive_rpm is not None:
        rpm = num(drive_rpm)
        fpm = calculate_belt_speed(rpm, pulley_diameter_in)
    else:
        fpm = num(belt_speed_fpm)
        rpm = calculate_drive_rpm(fpm, pulley_diameter_in)

    gear_ratio = calculate_gear_ratio(motor_rpm, rpm)
    return DrivetrainResult(
        drive_rpm=rpm,
        belt_speed_fpm=fpm,
        gear_ratio=gear_ratio,
        chain_ratio=chain_ratio,
        gearmotor_output_rpm=rpm * chain_ratio,
        total_drive_ratio=gear_ratio * chain_ratio,
    )


def calculate_actual_belt_speed(
    gearmotor_output_rpm: Optional[float],
    pulley_diameter_in: Optional[float],
    gm_sprocket_teeth: Optional[float],
    drive_shaft_sprocket_teeth: Optional[float],
    is_bottom_mount: bool,
) -> Tuple[Optional[float], Optional[str]]:
    """
    Belt speed produced by a selected gearmotor's rated output RPM.

    The gearmotor RPM is run back through the chain stage (for bottom-mount
    drives) and the drive pulley circumference.

    Returns:
        (belt speed FPM or None, warning code or None). A missing or negative
        RPM yields (None, None) - nothing has been selected yet.
    """
    if gearmotor_output_rpm is None or gearmotor_output_rpm < 0:
        return None, None
    if gearmotor_output_rpm == 0:
        return None, ACTUAL_GM_RPM_INVALID
    if not is_number(pulley_diameter_in) or pulley_diameter_in <= 0:
        return None, PULLEY_DIAMETER_MISSING

    drive_rpm = float(gearmotor_output_rpm)
    if is_bottom_mount:
        if not (is_number(gm_sprocket_teeth) and gm_sprocket_teeth > 0
                and is_number(drive_shaft_sprocket_teeth) and drive_shaft_sprocket_teeth > 0):
            return None, SPROCKET_TEETH_MISSING
        drive_rpm = drive_rpm * gm_sprocket_teeth / drive_shaft_sprocket_teeth

    return calculate_belt_speed(drive_rpm, pulley_diameter_in), None


def speed_delta_pct(desired_fpm: Optional[float], actual_fpm: Optional[float]) -> float:
    """Percent deviation of actual from desired speed; 0 when desired is not positive."""
    if desired_fpm is None or actual_fpm is None or not is_number(desired_fpm) or desired_fpm <= 0:
        return 0.0
    return (actual_fpm - desired_fpm) / desired_fpm * 100.0
