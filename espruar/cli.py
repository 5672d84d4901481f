#!/usr/bin/env python3
"""
Espruar CLI
===========
Command-line interface for fantasy name generation.

Usage:
    espruar generate -s elven -n 5 --subrace moon-elf --syllables 3
    espruar generate -s dwarven --name-type clan --save
    espruar species
    espruar favorites list --species gnomish
"""

import argparse
import json
import logging
import sys

from rich.console import Console

from espruar import __version__
from espruar.config import SPECIES_PROFILES, FINAL_VOWELS, GENDER_PREFIX_VOWELS

# =============================================================================
# Constants
# =============================================================================

SPECIES = list(SPECIES_PROFILES.keys())
FINAL_VOWEL_CHOICES = [v['vowel'] for v in FINAL_VOWELS]
GENDER_VOWEL_CHOICES = [v['vowel'] for v in GENDER_PREFIX_VOWELS]

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.console = Console()

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def success(self, msg: str):
        if not self.quiet:
            print(f"OK: {msg}")


def build_options(args) -> dict:
    """Collect generation options from parsed arguments (None means default)."""
    options = {
        'subrace': args.subrace,
        'name_type': args.name_type,
        'gender': args.gender,
        'style': args.style,
        'complexity': args.complexity,
        'target_syllables': args.syllables,
    }
    if args.no_nickname:
        if args.species == 'gnomish':
            options['include_nickname'] = False
        elif args.species == 'halfling' and args.name_type in (None, 'full', 'full_with_nickname'):
            options['name_type'] = 'full-no-nickname'
        else:
            raise ValueError("--no-nickname applies only to gnomish and halfling full names")
    return options


def open_favorites():
    """Favorites store at the configured location."""
    from espruar import FavoritesDB, get_config

    config = get_config()
    return FavoritesDB(config.favorites_db, max_favorites=config.max_favorites)


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate names."""
    from espruar import NameForge
    from espruar.ui import render_name

    forge = NameForge(seed=args.seed)
    options = build_options(args)

    results = forge.generate_many(args.species, count=args.count, **options)
    if len(results) < args.count:
        out.print(f"Only {len(results)} distinct names found (asked for {args.count}).")

    for result in results:
        if args.gender_vowel:
            forge.apply_gender_prefix_vowel(result, args.gender_vowel)
        if args.final_vowel:
            forge.apply_final_vowel(result, args.final_vowel)

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))
    elif out.quiet:
        for result in results:
            print(result.name)
    else:
        for result in results:
            render_name(result, out.console, target_syllables=args.syllables)

    if args.save:
        saved = 0
        for result in results:
            ok, message = forge.save(result)
            if ok:
                saved += 1
            else:
                out.print(f"  {result.name}: {message}")
        out.success(f"Saved {saved} of {len(results)} names to favorites")

    return 0


def cmd_species(args, out: Output):
    """List species with their defaults and accepted values."""
    from espruar import list_species

    out.print("Species")
    out.print("=" * 60)
    out.print()

    for name, info in list_species().items():
        out.print(f"  {name:<10} {info['description']}")
        defaults = ', '.join(f"{k}={v}" for k, v in info['defaults'].items())
        out.print(f"  {'':<10} defaults: {defaults}")
        for key, values in info['choices'].items():
            out.print(f"  {'':<10} {key}: {', '.join(values)}")
        out.print()

    return 0


def cmd_favorites(args, out: Output):
    """Manage saved favorites."""
    from espruar.ui import render_favorites

    db = open_favorites()
    action = args.fav_command or 'list'

    if action == 'list':
        records = db.list(getattr(args, 'species', None))
        if getattr(args, 'json', False):
            print(json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False))
        elif out.quiet:
            for record in records:
                print(record.name)
        else:
            render_favorites(records, out.console)
        return 0

    if action == 'remove':
        if db.remove(args.name, args.species):
            out.success(f"Removed '{args.name}' ({args.species})")
            return 0
        out.error(f"'{args.name}' ({args.species}) is not in your favorites")
        return 1

    if action == 'clear':
        if not args.force:
            response = input(f"Delete all {db.count()} favorites? This cannot be undone. [y/N] ")
            if response.lower() != 'y':
                out.print("Cancelled.")
                return 0
        removed = db.clear()
        out.success(f"Cleared {removed} favorites")
        return 0

    if action == 'export':
        json_str = db.export_json(args.output, getattr(args, 'species', None))
        if args.output:
            out.success(f"Exported to {args.output}")
        else:
            print(json_str)
        return 0

    out.error(f"Unknown favorites command '{action}'")
    return 1


# =============================================================================
# Main
# =============================================================================

def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='espruar',
        description='Espruar - Fantasy Character Name Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate -n 5
  %(prog)s generate -s elven --subrace drow --style feminine --final-vowel ae
  %(prog)s generate -s gnomish --name-type full --no-nickname --save
  %(prog)s generate -s orc -n 3 --json
  %(prog)s species
  %(prog)s favorites list --species dwarven
  %(prog)s favorites export -o favorites.json
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate names')
    p.add_argument('-s', '--species', choices=SPECIES, default='elven', help='Species (default: elven)')
    p.add_argument('-n', '--count', type=int, default=1, help='Number of names (default: 1)')
    p.add_argument('--subrace', help='Subrace (see "species")')
    p.add_argument('--name-type', dest='name_type', help='Name type (see "species")')
    p.add_argument('--gender', help='neutral, masculine or feminine')
    p.add_argument('--style', help='Elven style')
    p.add_argument('--complexity', help='Elven complexity: simple, auto or complex')
    p.add_argument('--syllables', type=int, help='Elven target syllable count')
    p.add_argument('--no-nickname', dest='no_nickname', action='store_true',
                   help='Gnomish or halfling full names without a nickname')
    p.add_argument('--seed', type=int, help='Seed for reproducible output')
    p.add_argument('--final-vowel', dest='final_vowel', choices=FINAL_VOWEL_CHOICES,
                   help='Append a final vowel to each name')
    p.add_argument('--gender-vowel', dest='gender_vowel', choices=GENDER_VOWEL_CHOICES,
                   help='Prepend a gender vowel to each name')
    p.add_argument('--save', action='store_true', help='Save generated names to favorites')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')
    p.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    # --- species ---
    subparsers.add_parser('species', help='List species, defaults and accepted values')

    # --- favorites ---
    p = subparsers.add_parser('favorites', aliases=['fav', 'f'], help='Manage favorites')
    fav = p.add_subparsers(dest='fav_command', help='Favorites commands')

    fp = fav.add_parser('list', aliases=['ls'], help='List favorites')
    fp.add_argument('--species', choices=SPECIES, help='Only one species')
    fp.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    fp = fav.add_parser('remove', aliases=['rm'], help='Remove a favorite')
    fp.add_argument('name', help='Name to remove')
    fp.add_argument('--species', choices=SPECIES, required=True, help='Species the name was saved under')

    fp = fav.add_parser('clear', help='Remove every favorite')
    fp.add_argument('--force', '-f', action='store_true', help='Skip confirmation')

    fp = fav.add_parser('export', help='Export favorites to JSON')
    fp.add_argument('--output', '-o', help='Output file path')
    fp.add_argument('--species', choices=SPECIES, help='Only one species')

    # Parse
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, 'verbose', False) else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    # Handle aliases
    cmd_map = {
        'gen': 'generate', 'g': 'generate',
        'fav': 'favorites', 'f': 'favorites',
    }
    command = cmd_map.get(args.command, args.command)
    if command == 'favorites':
        args.fav_command = {'ls': 'list', 'rm': 'remove'}.get(args.fav_command, args.fav_command)

    out = Output(quiet=getattr(args, 'quiet', False))

    # Dispatch
    commands = {
        'generate': cmd_generate,
        'species': cmd_species,
        'favorites': cmd_favorites,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except Exception as e:
            out.error(str(e))
            if getattr(args, 'verbose', False):
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
