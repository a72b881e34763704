from __future__ import annotations

"""
The Main KVOps Client that Manages KVTemplates

Usage:

    from kvops import KVOpsClient
    template = KVOpsClient.get_template(
        name = "counters",
        url = "redis://localhost:6379/0",
        value_serializer = 'int',
    )
    ops = template.ops_for_value()

    # Set a key
    ops.set('hits', 1)

    # Increment it
    ops.increment('hits', 5)

"""

import abc
from lzl.proxied import ProxyObject
from typing import Any, Dict, Optional, Union, TYPE_CHECKING

# We design it this way to minimize imports until runtime

if TYPE_CHECKING:
    from kvops.configs.main import KVOpsSettings
    from kvops.io.serializers import SerializerT
    from kvops.types.generic import KeyValueStore, AsyncKeyValueStore
    from kvops.components.template import KVTemplate


class KVOpsTemplateManager(abc.ABC):
    """
    The KVOps Template Manager
    """

    def __init__(
        self,
        **kwargs
    ):
        """
        Initializes the KVOps Template Manager
        """
        from kvops.configs import settings
        self.templates: Dict[str, 'KVTemplate'] = {}
        self.settings: 'KVOpsSettings' = settings
        self.logger = self.settings.logger
        self.autologger = self.settings.autologger
        if kwargs: self.settings.configure(**kwargs)

    def configure(
        self,
        **kwargs,
    ):
        """
        Configures the global settings

        Templates that were already created keep their configuration.
        """
        self.settings.configure(**kwargs)

    def create_template(
        self,
        name: Optional[str] = 'default',
        url: Optional[str] = None,
        key_serializer: Optional[Union[str, type, 'SerializerT']] = None,
        value_serializer: Optional[Union[str, type, 'SerializerT']] = None,
        client: Optional['KeyValueStore'] = None,
        aclient: Optional['AsyncKeyValueStore'] = None,
        **kwargs: Any,
    ) -> 'KVTemplate':
        """
        Returns a new KVTemplate

        - Does not register the template with the manager
        - Clients are created from `url` (or `settings.url`) when neither is given
        """
        from kvops.components.template import KVTemplate
        client_kwargs = self.settings.client_config.extract_kwargs(_exclude_none = True, **kwargs)
        kwargs = {k: v for k, v in kwargs.items() if k not in self.settings.client_config.model_fields}
        if client is None and aclient is None:
            from kvops.components.client import KVStore, AsyncKVStore
            client = KVStore.from_url(url, **client_kwargs)
            aclient = AsyncKVStore.from_url(url, **client_kwargs)
        self.autologger.info(f'Creating new KVTemplate with name {name}')
        return KVTemplate(
            client = client,
            aclient = aclient,
            key_serializer = key_serializer,
            value_serializer = value_serializer,
            name = name,
            **kwargs,
        )

    def get_template(
        self,
        name: Optional[str] = 'default',
        url: Optional[str] = None,
        key_serializer: Optional[Union[str, type, 'SerializerT']] = None,
        value_serializer: Optional[Union[str, type, 'SerializerT']] = None,
        client: Optional['KeyValueStore'] = None,
        aclient: Optional['AsyncKeyValueStore'] = None,
        overwrite: Optional[bool] = None,
        **kwargs: Any,
    ) -> 'KVTemplate':
        """
        Returns the KVTemplate registered under the name, creating it if needed
        """
        if name not in self.templates or overwrite:
            self.templates[name] = self.create_template(
                name = name,
                url = url,
                key_serializer = key_serializer,
                value_serializer = value_serializer,
                client = client,
                aclient = aclient,
                **kwargs,
            )
        return self.templates[name]

    def add_template(self, template: 'KVTemplate', overwrite: Optional[bool] = None) -> None:
        """
        Registers an existing template under its name
        """
        if template.name in self.templates and not overwrite:
            raise ValueError(f'Template `{template.name}` already exists and overwrite is False')
        self.templates[template.name] = template

    def remove_template(self, name: str) -> Optional['KVTemplate']:
        """
        Unregisters the template and returns it
        """
        return self.templates.pop(name, None)

    def close_templates(self) -> None:
        """
        Closes the sync clients of every template and clears the registry
        """
        for template in list(self.templates.values()):
            template.close()
        self.templates.clear()

    async def aclose_templates(self) -> None:
        """
        Closes every template and clears the registry
        """
        for template in list(self.templates.values()):
            await template.aclose()
        self.templates.clear()


KVOpsClient: KVOpsTemplateManager = ProxyObject(
    obj_getter = 'kvops.utils.lazy.get_template_manager',
)
