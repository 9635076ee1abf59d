from domain.steps.base import Step
from domain.steps.call import CallStep
from domain.steps.policy import PolicyStep
from domain.steps.contract import ContractStep
from domain.steps.model import ModelStep
from domain.steps.control import TryStep, LockStep

__all__ = [
    "Step",
    "CallStep",
    "PolicyStep",
    "ContractStep",
    "ModelStep",
    "TryStep",
    "LockStep",
]
