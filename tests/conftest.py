"""Shared fixtures: a small fleet file evaluated as of 2024-01-20."""

from datetime import date

import pytest

TODAY = date(2024, 1, 20)

FLEET_YAML = """
settings:
  requiredTraining:
    - Safety Orientation
    - Defensive Driving

drivers:
  - id: d1
    firstName: Ana
    lastName: Ruiz
    email: ana@example.com
    credentials:
      licenseNumber: L-100
      licenseClass: CDL-B
      licenseExpiryDate: '2024-02-15'
      medicalCardExpiryDate: '2025-06-01'
    training:
      - trainingType: Safety Orientation
        lastCompleted: '2023-01-01'
      - trainingType: Defensive Driving
        lastCompleted: '2022-01-01'
        nextDue: '2024-01-10'
  - id: d2
    firstName: Ben
    credentials:
      licenseExpiryDate: '2024-04-19'
    documents:
      - documentType: Hazmat Endorsement
        expiryDate: '2024-04-19'

vehicles:
  - id: v1
    name: Truck 1
    currentMileage: 56000
    currentEngineHours: 1000
    documents:
      - documentType: Registration
        expiryDate: '2024-01-13'
  - id: v2
    make: Ford
    model: F-550
    year: 2019

pmTemplates:
  - key: oil
    name: Oil Change
    triggerType: mileage
    triggerInterval: 5000
    checklist: [Drain oil, Replace filter]
    parts: [Oil filter]
  - key: pump
    triggerType: hours
    triggerInterval: 250
  - key: inspect
    name: Quarterly Inspection
    triggerType: days
    triggerInterval: 90

pmSchedules:
  - templateKey: oil
    vehicleId: v1
    baselineMileage: 50000
    nextDueMileage: 55000
    status: active
  - templateKey: pump
    vehicleId: v1
    baselineEngineHours: 760
    nextDueEngineHours: 1010
    status: active
  - templateKey: inspect
    vehicleId: v1
    baselineDate: '2024-01-01'
    nextDueDate: '2024-03-31'
    status: active
  - templateKey: oil
    vehicleId: v2
    nextDueMileage: 90000
    status: paused
  - templateKey: inspect
    vehicleId: v2
    status: active
  - templateKey: oil
    vehicleId: v2
    baselineMileage: 85000
    nextDueMileage: 90000
    status: active

fuelLogs:
  - vehicleId: v1
    driverId: d1
    date: '2024-01-05'
    gallons: 40
    cost: 150.0
  - vehicleId: v1
    date: '2024-01-12'
    gallons: 10
  - vehicleId: v2
    driverId: d2
    date: '2024-01-15'
    gallons: 20
    cost: 70.0
"""


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def fleet_file(tmp_path):
    path = tmp_path / "fleet.yaml"
    path.write_text(FLEET_YAML)
    return path
