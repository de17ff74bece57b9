"""Request and response models for the game API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class CommandResponse(BaseModel):
    """Outcome of one command; ``value`` carries the command's payload."""

    ok: bool
    value: Any = None
    error: Optional[str] = None


class PlantRequest(BaseModel):
    strain_id: str
    soil: str = "basic"


class WaterRequest(BaseModel):
    # Derived from the watering minigame on the client
    skill_bonus: float = Field(default=0.0, ge=0.0, le=0.5)


class TrainingRequest(BaseModel):
    technique_id: str
    success_level: float = Field(default=1.0, ge=0.0, le=1.0)


class EnhancerRequest(BaseModel):
    enhancer_id: str


class BreedRequest(BaseModel):
    parent1: str
    parent2: str


class MotherPlantRequest(BaseModel):
    strain_id: str
    phenotype_id: Optional[str] = None


class CloneRequest(BaseModel):
    slot: int = Field(ge=0)
    soil: str = "basic"


class TradeRequest(BaseModel):
    quantity: int = Field(gt=0)
    hour: Optional[int] = Field(default=None, ge=0, le=23)


class ContractRequest(BaseModel):
    quantity: int = Field(gt=0)
    weeks: int = Field(gt=0)
    strain_id: Optional[str] = None


class ResearchStartRequest(BaseModel):
    node_id: str


class TreatRequest(BaseModel):
    treatment_id: str


class EnvironmentRequest(BaseModel):
    parameter: str
    value: float


class AutomationRequest(BaseModel):
    enabled: bool
    employee_id: Optional[str] = None
    replant_strain_id: Optional[str] = None


class LoadRequest(BaseModel):
    # Snapshot file name inside the saves directory; newest when omitted
    filename: Optional[str] = None


class SaveResponse(BaseModel):
    path: str


class ActivityResponse(BaseModel):
    events: List[Dict[str, Any]]
