import logging
from enum import Enum

logger = logging.getLogger(__name__)


class FeatureType(Enum):
    ALGORITHM = "algorithm"
    EXPORT_HANDLER = "export_handler"
    UI_EXTENSION = "ui_extension"


class FeatureState(Enum):
    STANDARD = "standard"
    EXPERIMENTAL = "experimental"


class Feature:
    """
    A capability contributed by a plugin.

    ALGORITHM features are HTML post-processors: `handler(html, result)`
    returns the new HTML and may record metadata in the shared `result` dict.
    """

    def __init__(self, name, handler=None, feature_type=FeatureType.ALGORITHM,
                 state=FeatureState.STANDARD, meta=None):
        self.name = name
        self.handler = handler
        self.feature_type = feature_type
        self.state = state
        self.meta = meta or {}

    def __repr__(self):
        return f"Feature({self.name!r}, {self.feature_type.name}, {self.state.name})"


class FeatureRegistry:
    """Collects features from plugin modules, keeping registration order."""

    def __init__(self):
        self._features = []

    def register(self, feature):
        if any(f.name == feature.name for f in self._features):
            logger.warning(f"FeatureRegistry: Feature '{feature.name}' already registered, skipping")
            return False
        self._features.append(feature)
        logger.debug(f"FeatureRegistry: Registered {feature!r}")
        return True

    def register_plugin(self, plugin):
        """Register everything returned by a plugin module's `get_features()`."""
        count = 0
        for feature in plugin.get_features():
            if self.register(feature):
                count += 1
        logger.info(f"FeatureRegistry: Loaded {count} feature(s) from {getattr(plugin, '__name__', plugin)}")
        return count

    def get_features(self, feature_type=None):
        if feature_type is None:
            return list(self._features)
        return [f for f in self._features if f.feature_type == feature_type]

    def get_feature(self, name):
        for feature in self._features:
            if feature.name == name:
                return feature
        return None
