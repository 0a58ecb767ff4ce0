"""
Extraction pipeline for the braw2ilpd tool.

Runs the stages for one clip in order: attribute extraction, output naming,
ILPD payload write, and the optional detailed report. Each artifact gets its
own result so one can fail while the other succeeds.
"""

import datetime
from typing import Optional

import structlog

from .attributes import ImmersiveAttribute
from .extractors import extract_immersive_attributes
from .models import ArtifactResult, ExtractionResult
from .naming import OutputPathError, report_path_for, resolve_output_path, synthesize_output_name
from .output import write_atomic
from .report import save_report
from .sdk import FactoryProvider, ImmersiveClip, open_immersive_clip

logger = structlog.get_logger(__name__)

MISSING_PAYLOAD_WARNING = "No OpticalProjectionData found, ILPD file not created"


def run_extraction(clip: ImmersiveClip, input_path: str, output_arg: Optional[str] = None,
                   write_report: bool = False,
                   generated_at: Optional[datetime.datetime] = None) -> ExtractionResult:
    """
    Extract attributes from an open clip and write the output artifacts.

    Args:
        clip: Immersive interface of an open clip
        input_path: Path of the input clip, used for naming and the report
        output_arg: Output file or directory given by the user
        write_report: Also write the detailed attribute report
        generated_at: Timestamp for the report; now when None

    Returns:
        ExtractionResult: per-artifact outcomes, warnings and attribute summary
    """
    attrs = extract_immersive_attributes(clip)
    output_name = synthesize_output_name(input_path, attrs)
    warnings = []

    try:
        plan = resolve_output_path(output_arg, output_name)
    except OutputPathError as e:
        logger.error("Output path resolution failed", output=output_arg, error=str(e))
        plan = None
        primary = ArtifactResult(status="failed", message=str(e))

    if plan is not None:
        if plan.advisory:
            warnings.append(plan.advisory)

        payload = attrs.text_of(ImmersiveAttribute.PROJECTION_DATA)
        if payload:
            written = write_atomic(plan.path, payload)
            if written.success:
                logger.info("ILPD projection data saved", path=plan.path)
                primary = ArtifactResult(status="written", path=plan.path)
            else:
                primary = ArtifactResult(status="failed", path=plan.path,
                                         message=f"Failed to create ILPD file: {written.error}")
        else:
            logger.warning(MISSING_PAYLOAD_WARNING)
            warnings.append(MISSING_PAYLOAD_WARNING)
            primary = ArtifactResult(status="skipped", path=plan.path, message=MISSING_PAYLOAD_WARNING)

    report = None
    if write_report:
        if plan is None:
            report = ArtifactResult(status="failed", message="Output path could not be resolved")
        else:
            report_path = report_path_for(plan)
            written = save_report(report_path, input_path, plan.path, attrs, generated_at=generated_at)
            if written.success:
                logger.info("Detailed attributes saved", path=report_path)
                report = ArtifactResult(status="written", path=report_path)
            else:
                report = ArtifactResult(status="failed", path=report_path,
                                        message=f"Failed to create detailed attributes file: {written.error}")

    return ExtractionResult(
        input_path=input_path,
        output_name=output_name,
        primary=primary,
        report=report,
        warnings=warnings,
        attributes=attrs.to_dict(),
    )


def extract_clip(factory_provider: FactoryProvider, input_path: str, output_arg: Optional[str] = None,
                 write_report: bool = False) -> ExtractionResult:
    """
    Open a clip through the codec backend and run the extraction pipeline.

    Raises:
        ClipAccessError: If the factory, codec, clip or immersive interface
            cannot be acquired
    """
    logger.info("Opening clip", path=input_path)
    with open_immersive_clip(factory_provider, input_path) as clip:
        return run_extraction(clip, input_path, output_arg=output_arg, write_report=write_report)
