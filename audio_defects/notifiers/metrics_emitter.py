"""
Defect metrics emitter.

This module provides the DefectMetricsEmitter class for publishing
per-file defect summaries to CloudWatch.
"""

import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import boto3

from audio_defects.models.results import FileAnalysis
from audio_defects.utils.structured_logger import log_metrics_emission


logger = logging.getLogger(__name__)


DEFAULT_NAMESPACE = 'AudioDefects'


class DefectMetricsEmitter:
    """
    Emits defect metrics to CloudWatch.

    Metrics published per analysed file:
    - PeakLevel (dBFS, only when a peak exists)
    - SilenceEvents, OvermodulationEvents, HoldEvents
    - Duration
    """

    def __init__(self, cloudwatch_client, namespace: str = DEFAULT_NAMESPACE):
        """
        Initializes the metrics emitter.

        Args:
            cloudwatch_client: Boto3 CloudWatch client
            namespace: CloudWatch namespace
        """
        self.cloudwatch = cloudwatch_client
        self.namespace = namespace

    @classmethod
    def create(cls, namespace: str = DEFAULT_NAMESPACE, region_name: Optional[str] = None):
        """Builds an emitter with a fresh boto3 CloudWatch client."""
        client = boto3.client('cloudwatch', region_name=region_name)
        return cls(client, namespace=namespace)

    def build_metric_data(self, analysis: FileAnalysis) -> List[Dict[str, Any]]:
        """
        Builds CloudWatch metric entries for one analysis.

        Returns:
            List of metric data dicts; empty when the analysis has no scan.
        """
        scan = analysis.scan
        if scan is None:
            return []

        timestamp = datetime.now(timezone.utc)
        dimensions = [{'Name': 'FileName', 'Value': os.path.basename(analysis.path)}]
        counts = scan.count_by_kind()

        metric_data = [
            {
                'MetricName': 'SilenceEvents',
                'Value': float(counts['silence']),
                'Unit': 'Count',
                'Timestamp': timestamp,
                'Dimensions': dimensions
            },
            {
                'MetricName': 'OvermodulationEvents',
                'Value': float(counts['overmodulation']),
                'Unit': 'Count',
                'Timestamp': timestamp,
                'Dimensions': dimensions
            },
            {
                'MetricName': 'HoldEvents',
                'Value': float(counts['hold']),
                'Unit': 'Count',
                'Timestamp': timestamp,
                'Dimensions': dimensions
            },
            {
                'MetricName': 'Duration',
                'Value': float(scan.audio_format.duration_s),
                'Unit': 'Seconds',
                'Timestamp': timestamp,
                'Dimensions': dimensions
            },
        ]

        if scan.peak.level_dbfs is not None:
            metric_data.append({
                'MetricName': 'PeakLevel',
                'Value': float(scan.peak.level_dbfs),
                'Unit': 'None',
                'Timestamp': timestamp,
                'Dimensions': dimensions
            })

        return metric_data

    def emit_metrics(self, analysis: FileAnalysis) -> None:
        """
        Emits the metrics of one analysis to CloudWatch.

        Failures are logged and swallowed so reporting never aborts a batch.

        Args:
            analysis: Finished file analysis
        """
        source = os.path.basename(analysis.path)
        metric_data = self.build_metric_data(analysis)
        if not metric_data:
            return

        try:
            self.cloudwatch.put_metric_data(
                Namespace=self.namespace,
                MetricData=metric_data
            )

            logger.debug(
                f'Emitted {len(metric_data)} metrics to CloudWatch for {source}'
            )

            log_metrics_emission(source, len(metric_data), success=True)

        except Exception as e:
            logger.error(
                f'Failed to emit metrics to CloudWatch: {e}',
                exc_info=True
            )

            log_metrics_emission(source, 0, success=False, error=str(e))
