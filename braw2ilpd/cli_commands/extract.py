"""
Extract command class for ILPD extraction.

This module provides the ExtractCommand class that wraps the extraction
pipeline in a standardized command interface. Failures are returned as
result dictionaries carrying the process exit code.
"""

import os
from typing import Dict, Any, Optional

import structlog

from . import BaseCommand
from ..config.constants import EXIT_OK, EXIT_USAGE, EXIT_WRITE_FAILED
from ..config.settings import Config, load_settings
from ..pipeline import extract_clip
from ..sdk import ClipAccessError, FactoryProvider, load_backend

logger = structlog.get_logger(__name__)


class ExtractCommand(BaseCommand):
    """Command class for extracting ILPD data from one clip."""

    def __init__(self, config: Optional[Config] = None, factory_provider: Optional[FactoryProvider] = None):
        """
        Initialize ExtractCommand.

        Args:
            config: Settings; loaded from the environment when None
            factory_provider: Codec backend to use instead of the configured import path
        """
        self.config = config if config is not None else load_settings()
        self.factory_provider = factory_provider

    def execute(self, **kwargs) -> Dict[str, Any]:
        """Execute extraction with dict args, return dict result.

        Args:
            **kwargs: Extraction parameters including:
                - input_path: Path of the .braw clip (required)
                - output: Output file or directory (default: current directory)
                - write_report: Also write the detailed report (default: False)
                - backend: Backend import path overriding the configured one

        Returns:
            Dict containing the operation result and an 'exit_code'
        """
        try:
            kwargs = self.validate_args(**kwargs)
        except ValueError as e:
            return {"success": False, "error": str(e), "exit_code": EXIT_USAGE}

        try:
            factory_provider = self._resolve_backend(kwargs.get('backend'))
            result = extract_clip(
                factory_provider,
                kwargs['input_path'],
                output_arg=kwargs.get('output'),
                write_report=kwargs.get('write_report', False),
            )
        except ClipAccessError as e:
            logger.error("Clip access failed", path=kwargs['input_path'], error=str(e))
            return {"success": False, "error": str(e), "exit_code": e.exit_code}

        data = result.model_dump()
        if not result.success:
            errors = [a.message for a in (result.primary, result.report) if a is not None and a.failed]
            return {
                "success": False,
                "error": "; ".join(m for m in errors if m),
                "data": data,
                "exit_code": EXIT_WRITE_FAILED,
            }

        return {"success": True, "data": data, "exit_code": EXIT_OK}

    def validate_args(self, **kwargs) -> Dict[str, Any]:
        """Validate and clean arguments for extraction.

        Raises:
            ValueError: If required arguments are missing or invalid
        """
        input_path = (kwargs.get('input_path') or '').strip()
        if not input_path:
            raise ValueError("Input clip path is required")
        if not os.path.isfile(input_path):
            raise ValueError(f"Input clip not found: {input_path}")
        kwargs['input_path'] = input_path

        write_report = kwargs.get('write_report', False)
        if isinstance(write_report, str):
            write_report = write_report.lower() in ['true', '1', 'yes', 'on']
        kwargs['write_report'] = bool(write_report)

        return kwargs

    def _resolve_backend(self, backend: Optional[str]) -> FactoryProvider:
        if backend:
            return load_backend(backend)
        if self.factory_provider is not None:
            return self.factory_provider

        configured = self.config.get_setting('backend')
        if not configured:
            raise ClipAccessError(
                "No codec backend configured; pass --backend or set BRAW2ILPD_BACKEND"
            )
        return load_backend(configured)
