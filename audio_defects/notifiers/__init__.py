"""
Defect notifiers.

This module contains the CloudWatch emitter for per-file defect metrics.
"""

from audio_defects.notifiers.metrics_emitter import DefectMetricsEmitter

__all__ = ['DefectMetricsEmitter']
