from typing import Dict

from pydantic import BaseModel, Field


class Health(BaseModel):
    status: str
    queue_root: str
    queues: Dict[str, bool] = Field(
        description="Whether each queue directory is currently readable."
    )


class QueueLengths(BaseModel):
    incoming: float
    active: float
    maildrop: float
    deferred: float
    hold: float
    bounce: float
    total: float
