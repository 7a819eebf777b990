"""Reading and writing plan documents."""

from .parser import (
    PlanFormatError,
    load_plan_file,
    plan_from_dict,
    plan_to_dict,
    save_plan_file,
)

__all__ = ["PlanFormatError", "plan_from_dict", "plan_to_dict", "load_plan_file", "save_plan_file"]
