"""
Feature flag configuration for safe feature management
"""

import os
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class FeatureFlags:
    """Holds the feature switches resolved at startup"""

    # Core features that should always be enabled
    CORE_FEATURES = {
        'credits_summary': True,
        'catalog': True,
        'uploads': True,
        'user_authentication': True
    }

    # Features that can be switched off per deployment
    DEFAULT_OPTIONAL_FEATURES = {
        'subscriptions': True
    }

    # Environment variables that turn an optional feature off
    DISABLE_VARIABLES = {
        'subscriptions': 'SORA_CLEAN_DISABLE_SUBSCRIPTIONS'
    }

    def __init__(self, overrides: Optional[Dict[str, bool]] = None):
        self._optional = dict(self.DEFAULT_OPTIONAL_FEATURES)
        for feature_name, enabled in (overrides or {}).items():
            if feature_name in self.CORE_FEATURES:
                logger.warning(f"Cannot modify core feature: {feature_name}")
                continue
            if feature_name not in self._optional:
                logger.warning(f"Unknown feature: {feature_name}")
                continue
            self._optional[feature_name] = bool(enabled)

    @classmethod
    def from_environment(cls) -> 'FeatureFlags':
        """Read the disable switches from the process environment"""
        overrides = {}
        for feature_name, variable in cls.DISABLE_VARIABLES.items():
            disabled = os.getenv(variable, 'false').strip().lower() == 'true'
            if disabled:
                logger.info(f"Feature {feature_name} disabled by {variable}")
            overrides[feature_name] = not disabled
        return cls(overrides)

    def is_feature_enabled(self, feature_name: str) -> bool:
        """Check if a feature is enabled"""
        if feature_name in self.CORE_FEATURES:
            return self.CORE_FEATURES[feature_name]
        if feature_name in self._optional:
            return self._optional[feature_name]
        logger.warning(f"Unknown feature: {feature_name}")
        return False

    def get_enabled_features(self) -> List[str]:
        """Get list of all enabled features"""
        enabled_features = [name for name, enabled in self.CORE_FEATURES.items() if enabled]
        enabled_features.extend(name for name, enabled in self._optional.items() if enabled)
        return enabled_features

    def __eq__(self, other):
        if not isinstance(other, FeatureFlags):
            return NotImplemented
        return self._optional == other._optional

    def __repr__(self):
        return f"FeatureFlags({self._optional!r})"
