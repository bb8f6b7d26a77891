#!/usr/bin/env python3
"""
Master Pipeline Orchestration Script

Runs the complete analysis:
0. Verify data sources
1. Build the neighbourhood-level dataset (silver + gold layers)
2. Write the EDA report with all figures

Usage:
    # Full pipeline
    python scripts/run_pipeline.py

    # Report without maps
    python scripts/run_pipeline.py --no-maps

    # Skip verification
    python scripts/run_pipeline.py --skip-verify
"""

import sys
import argparse
from pathlib import Path
from datetime import datetime
import subprocess

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.append(str(PROJECT_ROOT))

from config.paths import ensure_directories


def print_header(text):
    """Print a formatted header"""
    print('\n' + '=' * 80)
    print(text.center(80))
    print('=' * 80 + '\n')


def run_command(cmd, description):
    """Run a command and handle errors"""
    print(f'\n>>> {description}')
    print(f'Command: {" ".join(cmd)}')
    print()

    try:
        subprocess.run(cmd, check=True, cwd=PROJECT_ROOT)
        print(f'\n✓ {description} completed successfully')
        return True
    except subprocess.CalledProcessError as e:
        print(f'\n✗ {description} failed with exit code {e.returncode}')
        return False
    except OSError as e:
        print(f'\n✗ {description} failed: {e}')
        return False


def verify_data():
    """Run data verification"""
    print_header('STEP 0: DATA VERIFICATION')
    cmd = [sys.executable, 'scripts/verify_data.py']
    return run_command(cmd, 'Data verification')


def build_neighbourhood_dataset():
    """Build the neighbourhood-level dataset"""
    print_header('STEP 1: BUILD NEIGHBOURHOOD DATASET')
    cmd = [sys.executable, '-m', 'data_engineering.datasets.build_neighbourhood_dataset']
    return run_command(cmd, 'Neighbourhood dataset builder')


def write_report(no_maps=False):
    """Write the EDA report"""
    print_header('STEP 2: EDA REPORT')
    cmd = [sys.executable, '-m', 'analysis.reports.eda_report']
    if no_maps:
        cmd.append('--no-maps')
    return run_command(cmd, 'EDA report')


def main():
    """Main pipeline orchestration"""
    parser = argparse.ArgumentParser(
        description='Run the complete street tree EDA',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full pipeline
  python scripts/run_pipeline.py

  # Report only, no boundary join
  python scripts/run_pipeline.py --report-only --no-maps
        """
    )

    parser.add_argument('--skip-verify', action='store_true',
                        help='Skip data verification step')
    parser.add_argument('--report-only', action='store_true',
                        help='Skip the neighbourhood dataset build')
    parser.add_argument('--no-maps', action='store_true',
                        help='Write the report without the boundary join and maps')

    args = parser.parse_args()

    print_header('VANCOUVER STREET TREES - EDA PIPELINE')
    print(f'Started: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}')
    print()

    print('Ensuring directory structure...')
    ensure_directories()
    print('✓ Directory structure ready\n')

    all_success = True
    start_time = datetime.now()

    # Step 0: Verify data (optional)
    if not args.skip_verify:
        if not verify_data():
            print('\n⚠️  Data verification failed. Continue anyway? [y/N] ', end='')
            response = input().strip().lower()
            if response != 'y':
                print('\nPipeline aborted.')
                return 1

    # Step 1: Neighbourhood dataset
    if not args.report_only and not args.no_maps:
        if not build_neighbourhood_dataset():
            all_success = False

    # Step 2: Report
    if not write_report(no_maps=args.no_maps):
        all_success = False

    end_time = datetime.now()
    duration = end_time - start_time

    print_header('PIPELINE SUMMARY')
    print(f'Started:  {start_time.strftime("%Y-%m-%d %H:%M:%S")}')
    print(f'Finished: {end_time.strftime("%Y-%m-%d %H:%M:%S")}')
    print(f'Duration: {duration}')
    print()

    if all_success:
        print('✓ PIPELINE COMPLETED SUCCESSFULLY')
        print()
        print('Open outputs/reports/eda_report.md to read the write-up.')
        print()
        return 0
    else:
        print('✗ PIPELINE COMPLETED WITH ERRORS')
        print()
        print('Check the error messages above for details.')
        print()
        return 1


if __name__ == '__main__':
    sys.exit(main())
