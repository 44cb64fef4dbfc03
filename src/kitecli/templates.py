"""Built-in templates for Kite projects and the provider selecting between them."""

from __future__ import annotations

import copy
import logging
from typing import Any, Mapping

from .config import ModuleKind, ProjectConfig

__all__ = [
    "APP_TEMPLATE",
    "CONTROLLER_TEMPLATE",
    "DEFAULT_TSCONFIG",
    "ERRORS_TEMPLATE",
    "KITE_CONFIG_TEMPLATE",
    "MODEL_TEMPLATE",
    "SERVICE_TEMPLATE",
    "TemplateProvider",
    "default_tsconfig",
]

LOGGER = logging.getLogger(__name__)


CONTROLLER_TEMPLATE = """
import { Controller, Entry, KiteError } from 'kite-framework';

@Controller()
export class $NAME$Controller {
    @Entry()
    async exec() {
        throw new KiteError(1000, 'this api is not implemented');
    }
}
"""

MODEL_TEMPLATE = """
import { Model } from 'kite-framework';

@Model()
export class $NAME$Model {
}
"""

SERVICE_TEMPLATE = """
import { Injectable } from 'kite-framework';

@Injectable()
export class $NAME$Service {
}
"""

ERRORS_TEMPLATE = """
export const errors = {
    // 2000: 'Database connection error',
}
"""

KITE_CONFIG_TEMPLATE = """
import { Config, HttpRouterProvider } from 'kite-framework';
import { errors } from '$errors$';
import * as path from 'path';

export const kiteConfig: Config = {
    errors: errors,
    hostname: '$hostname$',
    port: $port$,
    router: HttpRouterProvider(path.join(__dirname, 'controllers'), '.controller.js'),
};
"""

APP_TEMPLATE = """
import { Kite } from 'kite-framework';

new Kite('./kite.config').fly();
"""

DEFAULT_TSCONFIG: Mapping[str, Any] = {
    "compilerOptions": {
        "module": "commonjs",
        "target": "es2017",
        "rootDir": "./src",
        "outDir": "./dist",
        "sourceMap": True,
        "experimentalDecorators": True,
        "emitDecoratorMetadata": True,
    },
    "exclude": ["node_modules"],
}

_BUILTIN_MODULE_TEMPLATES: Mapping[ModuleKind, str] = {
    ModuleKind.CONTROLLER: CONTROLLER_TEMPLATE,
    ModuleKind.MODEL: MODEL_TEMPLATE,
    ModuleKind.SERVICE: SERVICE_TEMPLATE,
}


def default_tsconfig() -> dict[str, Any]:
    """Return a fresh, mutable copy of :data:`DEFAULT_TSCONFIG`."""

    return copy.deepcopy(dict(DEFAULT_TSCONFIG))


class TemplateProvider:
    """Supply the template text used for each module kind.

    Configured templates win; a blank configured template falls back to the
    built-in one with a warning.
    """

    def __init__(self, overrides: Mapping[ModuleKind, str] | None = None) -> None:
        self._overrides = dict(overrides or {})

    @classmethod
    def from_config(cls, config: ProjectConfig) -> "TemplateProvider":
        return cls({kind: kind_config.template for kind, kind_config in config.kinds.items()})

    @staticmethod
    def builtin(kind: ModuleKind) -> str:
        return _BUILTIN_MODULE_TEMPLATES[kind]

    def get(self, kind: ModuleKind) -> str:
        if kind not in self._overrides:
            return self.builtin(kind)

        template = self._overrides[kind]
        if not template.strip():
            LOGGER.warning("invalid template for %s, using the default template", kind.value)
            return self.builtin(kind)
        return template
