"""Employee automation of watering, fertilizing and harvesting."""

from growsim.automation.scheduler import (
    assign_employee,
    configure_automation,
    employee_skill,
    hire_employee,
    run_automation,
    set_slot_automation,
)

__all__ = [
    "assign_employee",
    "configure_automation",
    "employee_skill",
    "hire_employee",
    "run_automation",
    "set_slot_automation",
]
