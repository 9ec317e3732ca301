#!/usr/bin/env python3

import argparse
import datetime
import os
import sys
import time
import traceback
from typing import List, Optional


# Version identifier - Update this when code changes
VERSION = "0.3.0"

from autodocs.config import Config, ConfigError
from autodocs.file_processor import FileProcessor
from autodocs.filter import FileFilter
from autodocs.git_operations import GitOperations, RepositoryError, repo_name
from autodocs.metadata import MetadataError, MetadataStore
from autodocs.sync_engine import SyncEngine, SyncReport
from autodocs.translator import Translator, create_translator


def format_time(seconds: float) -> str:
    """Format time in seconds to human-readable string"""
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if hours > 0:
        return f"{int(hours)}h {int(minutes)}m {int(seconds)}s"
    elif minutes > 0:
        return f"{int(minutes)}m {int(seconds)}s"
    else:
        return f"{seconds:.1f}s"


class TranslationWorkflow:
    """Main translation workflow orchestrator"""

    def __init__(self, config: Config, translator=None, git_ops: Optional[GitOperations] = None):
        self.config = config
        self.translator = translator or create_translator(config.engine)
        self.git_ops = git_ops or GitOperations()
        self.file_filter = FileFilter(config.filter)

        name = repo_name(config.repo)
        self.workspace = config.workspace
        self.repo_path = os.path.join(self.workspace, name)
        self.translated_repo_path = os.path.join(self.workspace, f"{name}-translated")
        self.meta_path = os.path.join(self.workspace, f"{name}.meta.json")

        self.file_processor = FileProcessor(self.repo_path, self.translated_repo_path)
        self.store = MetadataStore(self.meta_path)
        self.report: Optional[SyncReport] = None

    def sync_repository(self) -> str:
        """Clone or pull the source repository and return its HEAD commit"""
        os.makedirs(self.workspace, exist_ok=True)
        if not self.git_ops.sync_repository(self.config.repo, self.config.branch, self.repo_path):
            if not os.path.isdir(self.repo_path):
                raise RepositoryError(f"No checkout of {self.config.repo} at {self.repo_path}")
            print("  ⚠️ Continuing with the existing checkout")
        return self.git_ops.get_head_commit(self.repo_path)

    def publish(self) -> bool:
        """Copy the translated tree into the publish checkout and commit it"""
        publish = self.config.publish
        print(f"\n🐙 [STEP 7: PUBLISH] Publishing translated tree to {publish.path}...")
        self.file_processor.copy_tree(self.translated_repo_path, publish.path)
        message = f"{publish.message} at {datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"
        return self.git_ops.commit_and_push(publish.path, message, publish.push)

    def print_summary(self, report: SyncReport, elapsed: float) -> None:
        print(f"\n🎉 [STEP 6: SUMMARY] Translation finished in {format_time(elapsed)}")
        print(f"  📊 Files to translate: {report.total}")
        print(f"  ✅ Newly translated: {report.translated}")
        print(f"  ⏭️ Already translated: {report.skipped}")
        print(f"  📄 Copied verbatim: {report.copied}")
        if report.failed:
            print(f"  ❌ Failed: {report.failed}")
            for result in report.failures:
                print(f"    - {result.path}: {result.reason}")

        if isinstance(self.translator, Translator):
            stats = self.translator.get_statistics()
            print(f"  🔢 API Calls: {stats['api_calls']}, Input Tokens: {stats['input_tokens']:,}, "
                  f"Output Tokens: {stats['output_tokens']:,}")

    def run(self) -> bool:
        """Run one full sync and translation pass"""
        start_time = time.time()
        try:
            print(f"\n🔄 [STEP 1: REPOSITORY SYNC] Syncing {self.config.repo} into {self.repo_path}...")
            commit = self.sync_repository()

            print(f"\n📑 [STEP 2: METADATA] Loading {self.meta_path}...")
            meta = self.store.load()
            meta.commit = commit
            print(f"  Latest commit hash: {commit}")

            print(f"\n🔍 [STEP 3: FILE DISCOVERY] Walking {self.repo_path}...")
            files = self.file_processor.walk_tree()
            by_relative = {self.file_processor.relative_path(f): f for f in files}
            translatable, passthrough = self.file_filter.classify(by_relative)
            print(f"  Suffix: {self.file_filter.suffixes}")
            print(f"  📂 Found {len(files)} file(s), {len(translatable)} to translate")

            engine = SyncEngine(self.file_processor, self.translator, self.store, meta)
            report = SyncReport()
            self.report = report

            print(f"\n📄 [STEP 4: MIRROR] Copying {len(passthrough)} file(s) verbatim...")
            engine.mirror_files([by_relative[p] for p in passthrough], report)

            print(f"\n🤖 [STEP 5: TRANSLATION] Got {len(translatable)} file(s) to translate")
            engine.translate_files([by_relative[p] for p in translatable], report)

            self.store.save(meta)
            self.print_summary(report, time.time() - start_time)

            published = True
            if self.config.publish:
                published = self.publish()
                if not published:
                    print("❌ Publishing the translated tree failed")

            return report.failed == 0 and published

        except (RepositoryError, MetadataError) as e:
            print(f"❌ {e}")
            return False
        except Exception as e:
            print(f"❌ An unexpected error occurred in the translation workflow: {e}")
            traceback.print_exc()
            return False


def run_once(config_path: str) -> bool:
    config = Config.from_file(config_path)
    config.print_config()
    return TranslationWorkflow(config).run()


def watch(config_path: str, interval: float) -> None:
    """Run the workflow forever, sleeping between passes"""
    while True:
        print(f"Running auto-translation at time: {datetime.datetime.now().isoformat()}")
        try:
            run_once(config_path)
        except (ConfigError, RepositoryError) as e:
            print(f"❌ {e}")
        print(f"Auto-translation finished at time: {datetime.datetime.now().isoformat()}")
        print(f"Sleeping for {interval:g} seconds")
        time.sleep(interval)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autodocs",
        description="Mirror a Git repository into a workspace and translate matching files.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Run the auto-translation using the config file")
    run_parser.add_argument("config", metavar="CONFIG", help="The YAML config file to use")

    watch_parser = subparsers.add_parser("watch", help="Run the auto-translation repeatedly")
    watch_parser.add_argument("config", metavar="CONFIG", help="The YAML config file to use")
    watch_parser.add_argument(
        "--interval",
        type=float,
        default=60,
        help="Seconds to sleep between runs.",
    )
    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return

    try:
        if args.command == "watch":
            watch(args.config, args.interval)
            return

        print("🚀 Starting translation workflow...")
        if not run_once(args.config):
            print("❌ Workflow failed.")
            sys.exit(1)
        print("✅ Workflow completed successfully.")

    except (ConfigError, RepositoryError) as e:
        print(f"❌ {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("Interrupted.")
        sys.exit(130)


if __name__ == "__main__":
    main()
