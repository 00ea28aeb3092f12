#!/usr/bin/env python3
"""
Shared constants for the gravity simulation core (SI units unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""
import math

# Physical constants
G = 6.67259e-11  # m^3 kg^-1 s^-2

# Solar system reference data
EARTH_MASS = 5.965e24  # kg
EARTH_RADIUS = 6371000.0  # m
EARTH_ORBIT_RADIUS = 149597870700.0  # m (1 AU)
EARTH_ORBIT_VELOCITY = 29805.655  # m/s
SOLAR_MASS = 1.986e30  # kg

# Body defaults
DEFAULT_DENSITY = EARTH_MASS / (4.0 / 3.0 * math.pi * EARTH_RADIUS ** 3)  # kg/m^3
DEFAULT_POSITION_SCALE = 2.0 / EARTH_ORBIT_RADIUS  # display units per meter
DEFAULT_RADIUS_SCALE = 0.01 / EARTH_RADIUS  # display units per meter of radius

# Simulation controls
STEP_TIME = 24 * 3600.0  # simulated seconds per World.step()

# Trail buffer
TRACE_NUM = 200  # samples kept in the live window
TRACE_PRELOCATE = 5  # backing buffer holds TRACE_NUM * TRACE_PRELOCATE rows
