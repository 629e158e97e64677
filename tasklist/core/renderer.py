import logging
import traceback

from tasklist.features.registry import FeatureType

logger = logging.getLogger(__name__)


def default_features():
    """ALGORITHM features of the bundled plugins."""
    from tasklist.plugins.task_list import plugin as task_list_plugin

    return [f for f in task_list_plugin.get_features() if f.feature_type == FeatureType.ALGORITHM]


def render_html(html, features=None):
    """
    Run already-rendered, sanitized HTML through the ALGORITHM features.

    Handlers run in order and share one metadata dict.

    Returns:
        tuple: (html, metadata)
    """
    if features is None:
        features = default_features()

    metadata = {}
    for feature in features:
        if feature.feature_type != FeatureType.ALGORITHM or feature.handler is None:
            continue
        try:
            html = feature.handler(html, metadata)
        except Exception as e:
            logger.error(f"Renderer: Feature '{feature.name}' failed: {e}")
            logger.error(traceback.format_exc())
            raise
    return html, metadata
