"""POST /api/evaluate — score detection on gallery images against ground truth."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from shapesight.api.detect import run_in_worker
from shapesight.config import Settings
from shapesight.dependencies import get_settings
from shapesight.evaluation.harness import GroundTruth, load_ground_truth, run_evaluation
from shapesight.gallery import get_all_sample_names, render_sample, sample_ground_truth
from shapesight.models.evaluation import EvaluationReport
from shapesight.models.requests import EvaluateRequest

router = APIRouter()


def _ground_truth(settings: Settings) -> GroundTruth:
    truth = sample_ground_truth()
    if settings.ground_truth_path:
        truth.update(load_ground_truth(settings.ground_truth_path))
    return truth


@router.post("/evaluate", response_model=EvaluationReport)
async def evaluate(req: EvaluateRequest, settings: Settings = Depends(get_settings)) -> EvaluationReport:
    available = set(get_all_sample_names())
    names = req.names or get_all_sample_names()
    unknown = [n for n in names if n not in available]
    if unknown:
        raise HTTPException(status_code=404, detail=f"Unknown test images: {', '.join(unknown)}")
    truth = _ground_truth(settings)
    return await run_in_worker(run_evaluation, names, render_sample, truth)
