"""Provisioning use cases."""

from enroll.application.usecase.provisioning.begin_provisioning import (
    BeginProvisioningRequest,
    BeginProvisioningUseCase,
)
from enroll.application.usecase.provisioning.resume_provisioning import (
    ResumeProvisioningRequest,
    ResumeProvisioningUseCase,
)
from enroll.application.usecase.provisioning.workflow import (
    ProvisioningContext,
    ProvisioningResponse,
    ProvisioningWorkflow,
)

__all__ = [
    "BeginProvisioningRequest",
    "BeginProvisioningUseCase",
    "ProvisioningContext",
    "ProvisioningResponse",
    "ProvisioningWorkflow",
    "ResumeProvisioningRequest",
    "ResumeProvisioningUseCase",
]
