"""
Document Mapper

Builds one SolrDocument per record from its addon configuration:

1. identity       : id, model, modelid
2. visibility     : public
3. fields         : {addon}_{field}_t, plus title for the title field
4. tags           : tag (tagged addons only)
5. result type    : resulttype

Field names are namespaced by addon so fields of one addon never collide;
the reserved names above are shared by every document type.
"""

from __future__ import annotations

import logging

from .document import SolrDocument
from .fields import FieldValueResolver
from .records import Record, Storage
from .visibility import VisibilityResolver
from ..addons.models import AddonConfig
from ..addons.registry import AddonRegistry

logger = logging.getLogger("solr.mapper")


def make_solr_name(addon: AddonConfig, field_name: str) -> str:
    """Return the text-indexed Solr field name for an addon field."""
    return f"{addon.name}_{field_name}_t"


class DocumentMapper:
    def __init__(
        self,
        storage: Storage,
        registry: AddonRegistry,
        fields: FieldValueResolver | None = None,
        visibility: VisibilityResolver | None = None,
    ) -> None:
        self.fields = fields or FieldValueResolver(storage)
        self.visibility = visibility or VisibilityResolver(storage, registry)

    async def map_record(self, record: Record, addon: AddonConfig) -> SolrDocument:
        doc = SolrDocument()
        record_id = record.get_id()

        doc.id = f"{addon.table}_{record_id}"
        doc.set_field("model", addon.table)
        doc.set_field("modelid", record_id)

        doc.set_field("public", await self.visibility.is_public(record, addon))

        for field in addon.fields:
            solr_name = make_solr_name(addon, field.name)
            is_title = field.name == addon.title_field_name
            values = await self.fields.resolve(record, field, addon.table)

            for value in values:
                doc.add_field(solr_name, value)
                if is_title:
                    doc.add_field("title", value)

        if addon.tagged:
            for tag in await record.get_tags():
                doc.add_field("tag", tag.name)

        if addon.result_type:
            doc.set_field("resulttype", addon.result_type)

        logger.debug("Mapped %s", doc.id)
        return doc
