"""Shared base for the record list, record form and delete confirmation props.

Each view is a plain dataclass that `PersonalInfoApp` rebuilds from the
current store and dialog state; `name` identifies which view the props
belong to when a presentation layer dispatches on it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BaseView:
    name: str = "base"
