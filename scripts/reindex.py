import argparse
import asyncio
import os
import sys

# Ensure src is in pythonpath
sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from dotenv import load_dotenv
load_dotenv()

from solr_addon_indexer.config import settings
from solr_addon_indexer.main import configure_logging
from solr_addon_indexer.addons.loader import load_addons
from solr_addon_indexer.db.session import create_engine
from solr_addon_indexer.db.storage import SqlStorage
from solr_addon_indexer.indexing.indexer import AddonIndexer
from solr_addon_indexer.solr.client import SolrClient
from solr_addon_indexer.reindex import reindex

async def main(args):
    configure_logging("DEBUG" if args.verbose else None)

    registry = load_addons(args.addons or settings.addons_path)
    if args.only:
        unknown = set(args.only) - set(registry.names())
        if unknown:
            print(f"Unknown addon(s): {', '.join(sorted(unknown))}")
            return 1

    engine = create_engine()
    try:
        indexer = AddonIndexer(SqlStorage(engine), registry)

        if args.dry_run:
            addons = [registry[name] for name in args.only] if args.only else None
            docs = await indexer.index_all(addons)
            print(f"Would index {len(docs)} document(s).")
            return 0

        # Reindexing a subset must not wipe the other addons' documents
        if args.only:
            solr = SolrClient()
            total = 0
            for name in args.only:
                docs = await indexer.index_all_for_addon(registry[name])
                total += await solr.add_documents(docs, batch_size=settings.index_batch_size)
            print(f"Indexed {total} document(s).")
            return 0

        result = await reindex(
            indexer,
            SolrClient(),
            batch_size=settings.index_batch_size,
            clear=not args.keep,
        )
        for addon in result.addons:
            print(f"  {addon.name:<24} {addon.documents:>8}")
        print(f"Indexed {result.total} document(s).")
        return 0
    finally:
        await engine.dispose()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Rebuild the Solr index from the configured addons.")
    parser.add_argument("--addons", help="Addon definition file or directory (defaults to ADDONS_PATH).")
    parser.add_argument("--only", nargs="+", metavar="ADDON", help="Index only these addons, without clearing the core.")
    parser.add_argument("--keep", action="store_true", help="Do not clear the core before a full reindex.")
    parser.add_argument("--dry-run", action="store_true", help="Map records but send nothing to Solr.")
    parser.add_argument("-v", "--verbose", action="store_true")
    sys.exit(asyncio.run(main(parser.parse_args())))
