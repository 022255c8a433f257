"""
Logo Database

Static ASCII art for supported distributions. The table is built once at
import and exposed read-only.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple


@dataclass(frozen=True)
class LogoDefinition:
    """ASCII art lines plus the rich color applied to them."""
    name: str
    lines: Tuple[str, ...]
    color: Optional[str] = None


ARCH = LogoDefinition(
    name="arch",
    color="bright_cyan",
    lines=(
        "                   -`                  ",
        "                  .o+`                 ",
        "                 `ooo/                 ",
        "                `+oooo:                ",
        "               `+oooooo:               ",
        "               -+oooooo+:              ",
        "             `/:-:++oooo+:             ",
        "            `/++++/+++++++:            ",
        "           `/++++++++++++++:           ",
        "          `/+++ooooooooooooo/`         ",
        "         ./ooosssso++osssssso+`        ",
        "        .oossssso-````/ossssss+`       ",
        "       -osssssso.      :ssssssso.      ",
        "      :osssssss/        osssso+++.     ",
        "     /ossssssss/        +ssssooo/-     ",
        "   `/ossssso+/:-        -:/+osssso+-   ",
        "  `+sso+:-`                 `.-/+oso:  ",
        " `++:.                           `-/+/ ",
        " .`                                 `/ ",
    ),
)

UBUNTU = LogoDefinition(
    name="ubuntu",
    color="bright_red",
    lines=(
        "            .-/+oossssoo+/-.            ",
        "        `:+ssssssssssssssssss+:`        ",
        "      -+ssssssssssssssssssyyssss+-      ",
        "    .ossssssssssssssssso/.  .ossssso.   ",
        "   +sssssssssssssso:.         .+sssso+  ",
        "  +ssssssssso+:-`               :ysssss+",
        "  ossso+/:.`                     .ossso ",
        " `ossso-                          -ysss ",
        "  :oooo:          .`           `.oooo:  ",
        "   /ooooo/-..             `../ooooo/   ",
        "    -/ooooooooo++++++oooooooooo/-`     ",
        "      `-/+ooooooooooooooo+/:.`         ",
    ),
)

DEBIAN = LogoDefinition(
    name="debian",
    color="bright_red",
    lines=(
        '       _,met$$$$$gg.          ',
        '    ,g$$$$$$$$$$$$$$$P.       ',
        '  ,g$$P"     """Y$$."  .      ',
        " ,$$P'              `$$$.     ",
        "',$$P       ,ggs.     `$$b:   ",
        '`d$$\'     ,$P"\'   .    $$$    ',
        " $$P      d$'     ,    $$P    ",
        " $$:      $$.   -    ,d$$'    ",
        " $$;      Y$b._   _,d$P'      ",
        ' Y$$.    `.`"Y$$$$P"\'         ',
        ' `$$b      "-.__              ',
        "  `Y$$                        ",
        "   `Y$$.                      ",
        "     `$$b.                    ",
        "       `Y$$b.                 ",
        '          `"Y$b._             ',
        '              `""""           ',
    ),
)

FEDORA = LogoDefinition(
    name="fedora",
    color="bright_blue",
    lines=(
        "             /',                      ",
        "            //  '                     ",
        "           //  /                      ",
        "          //  /                       ",
        "         //  /                        ",
        "        //  /                         ",
        "       //  /                          ",
        "      //  /                           ",
        "     //  /                            ",
        "    ',   '                            ",
        "      ',                              ",
        "        ',                            ",
        "          ',_,,,_,,                   ",
    ),
)

MANJARO = LogoDefinition(
    name="manjaro",
    color="bright_green",
    lines=(
        "██████████████████  ████████",
        "██████████████████  ████████",
        "██████████████████  ████████",
        "██████████████████  ████████",
        "████████            ████████",
        "████████  ████████  ████████",
        "████████  ████████  ████████",
        "████████  ████████  ████████",
        "████████  ████████  ████████",
        "████████  ████████  ████████",
        "████████  ████████  ████████",
        "████████  ████████  ████████",
        "████████  ████████  ████████",
        "████████  ████████  ████████",
    ),
)

GENTOO = LogoDefinition(
    name="gentoo",
    color="magenta",
    lines=(
        "         -/osy+:.              ",
        "        :ooooooo+/`            ",
        "       :oooooooooo+.           ",
        "      -+oooooooooooo.          ",
        "     .+ooooooooooooo/          ",
        "     :ooooooooooooo+-          ",
        "     /ooooooooooo+/-           ",
        "     /ooooooooo+/.             ",
        "     :ooooooo+/-               ",
        "      -+ooo+/.                 ",
        "       `:/-`                   ",
    ),
)

OPENSUSE = LogoDefinition(
    name="opensuse",
    color="bright_green",
    lines=(
        "           .;ldkO0000Okdl;.           ",
        "       .;d00xl:^''''''^:ok00d;.       ",
        "     .d00l'                'o00d.     ",
        "   .d0Kd'  Okxol:;,.          :O0d.   ",
        "  .OKKKK0kOKKKKKKKKKKKOxo:,    lKO.   ",
        " ,0KKKKKKKKKKKKKKKK0d:,,,,;cxKKK0:    ",
        ".OKKKKKKKKKKKKKKKKk.        ,d0KK0.   ",
        ":KKKKKKKKKKKKKKKK:            .OK:    ",
        "dKKKKKKKKKKKKKK0.              .c,    ",
        "dKKKKKKKKKKKKKK0.                     ",
        ":KKKKKKKKKKKKKKKK:            .OK:    ",
        ".OKKKKKKKKKKKKKKKKk.        ;d0KK0.   ",
        " ,0KKKKKKKKKKKKKKKK0kc:,,;xKKKKK0:    ",
        "  .OKKKK0xdxkOOOO0KKKKKKKKKKK0.       ",
        "   .d0Ko.     ...''',;:clxKKd.        ",
        "     'l0Kk:.            .d0l.         ",
        "       .;lxOkdl:;,,;:ldO0d;.          ",
        "           .,cdk00000xc:.             ",
    ),
)

MACOS = LogoDefinition(
    name="macos",
    color="bright_white",
    lines=(
        "                    c.'          ",
        "                 ,xNMM.          ",
        "               .OMMMMo           ",
        "               lMM\"              ",
        "     .;loddo:.  .olloddol;.      ",
        "   cKMMMMMMMMMMNWMMMMMMMMMM0:    ",
        " .KMMMMMMMMMMMMMMMMMMMMMMMWd.    ",
        " XMMMMMMMMMMMMMMMMMMMMMMMX.      ",
        ";MMMMMMMMMMMMMMMMMMMMMMMM:       ",
        ":MMMMMMMMMMMMMMMMMMMMMMMM:       ",
        ".MMMMMMMMMMMMMMMMMMMMMMMMX.      ",
        " kMMMMMMMMMMMMMMMMMMMMMMMMWd.    ",
        " 'XMMMMMMMMMMMMMMMMMMMMMMMMMMk   ",
        "  'XMMMMMMMMMMMMMMMMMMMMMMMMK.   ",
        "    kMMMMMMMMMMMMMMMMMMMMMMd     ",
        "     ;KMMMMMMMWXXWMMMMMMMk.      ",
        "       \"cooc*\"    \"*coo'\"        ",
    ),
)

GENERIC_LINUX = LogoDefinition(
    name="linux",
    color="white",
    lines=(
        "        #####        ",
        "       #######       ",
        "       ##O#O##       ",
        "       #######       ",
        "     ###########     ",
        "    #############    ",
        "   ###############   ",
        "   ################  ",
        "  #################  ",
        "#####################",
        "#####################",
        "  #################  ",
    ),
)

# CachyOS ships the Arch art in its own color.
CACHYOS = LogoDefinition(name="cachyos", lines=ARCH.lines, color="bright_green")

FALLBACK_LOGO = GENERIC_LINUX

LOGOS: Mapping[str, LogoDefinition] = MappingProxyType({
    logo.name: logo
    for logo in (
        ARCH, CACHYOS, UBUNTU, DEBIAN, FEDORA, MANJARO, GENTOO, OPENSUSE, MACOS, GENERIC_LINUX,
    )
})

# Other os-release IDs that share a logo.
ALIASES: Mapping[str, str] = MappingProxyType({
    "archlinux": "arch",
    "archarm": "arch",
    "endeavouros": "arch",
    "manjaro-arm": "manjaro",
    "opensuse-leap": "opensuse",
    "opensuse-tumbleweed": "opensuse",
    "opensuse-microos": "opensuse",
    "suse": "opensuse",
    "darwin": "macos",
    "mac": "macos",
})


def _resolve(identity: str) -> Optional[LogoDefinition]:
    key = identity.strip().lower()
    return LOGOS.get(ALIASES.get(key, key))


def lookup_logo(identity: Optional[str], id_like: Iterable[str] = ()) -> LogoDefinition:
    """
    Select the logo for a distribution identity.

    Args:
        identity: os-release ``ID`` (or a logo name); None for unknown
        id_like: os-release ``ID_LIKE`` entries, tried in order

    Returns:
        The matching logo, or the generic fallback. Never None.
    """
    for candidate in (identity, *id_like):
        if not candidate:
            continue
        logo = _resolve(candidate)
        if logo is not None:
            return logo
    return FALLBACK_LOGO


def available_logos():
    """Return the names of all built-in logos."""
    return sorted(LOGOS)
