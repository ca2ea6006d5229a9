"""Demo dataset for local development.

The whole load runs in one transaction: existing rows are removed (children
first) and the demo rows inserted. Any failure rolls everything back.
"""

import json
from typing import Any

from npcdb.config import get_logger

from .connection_manager import DatabaseConnectionManager

logger = get_logger(__name__)

SEED_AUTHOR = "seed-script"

FAREWELL_ID = "11111111-1111-4111-8111-111111111111"
INFERNAL_ID = "22222222-2222-4222-8222-222222222222"

# Children before parents
DELETE_ORDER = (
    "character_notes",
    "movie_references",
    "movie_dialogue_files",
    "movie_scripts",
    "subtitle_segments",
    "scenes",
    "characters",
    "movies",
)

SEED_MOVIES: list[dict[str, Any]] = [
    {
        "id": FAREWELL_ID,
        "title": "霸王别姬",
        "original_title": "Farewell My Concubine",
        "release_year": 1993,
        "language": "zh-CN",
        "runtime_minutes": 171,
        "genres": ["剧情", "爱情", "历史"],
        "poster_url": "https://example.com/posters/farewell-my-concubine.jpg",
        "synopsis": "两名京剧伶人程蝶衣与段小楼在时代洪流中的纠葛与悲剧。",
    },
    {
        "id": INFERNAL_ID,
        "title": "无间道",
        "original_title": "Infernal Affairs",
        "release_year": 2002,
        "language": "zh-CN",
        "runtime_minutes": 101,
        "genres": ["犯罪", "惊悚"],
        "poster_url": "https://example.com/posters/infernal-affairs.jpg",
        "synopsis": "一名警方卧底与黑帮安插的内鬼在善恶之间相互追逐。",
    },
]

SEED_CHARACTERS: list[dict[str, Any]] = [
    {
        "id": "aaaaaaa1-aaaa-4aaa-8aaa-aaaaaaaaaaa1",
        "movie_id": FAREWELL_ID,
        "name": "程蝶衣",
        "aliases": ["小豆子"],
        "actor_name": "张国荣",
        "description": "自小习艺成为旦角，大半生沉浸在戏里戏外的情感旋涡。",
        "traits": {"性格": "执着", "擅长": "京剧"},
    },
    {
        "id": "aaaaaaa2-aaaa-4aaa-8aaa-aaaaaaaaaaa2",
        "movie_id": FAREWELL_ID,
        "name": "段小楼",
        "aliases": ["小石头"],
        "actor_name": "张丰毅",
        "description": "程蝶衣的师兄与搭档，性格刚毅，在乱世中摇摆。",
        "traits": {"性格": "侠义", "内心": "矛盾"},
    },
    {
        "id": "bbbbbbb1-bbbb-4bbb-8bbb-bbbbbbbbbbb1",
        "movie_id": INFERNAL_ID,
        "name": "陈永仁",
        "aliases": ["Lau Kin Ming"],
        "actor_name": "梁朝伟",
        "description": "警方卧底，长期深陷黑帮与警队身份冲突。",
        "traits": {"性格": "沉稳", "特质": "双面人生"},
    },
    {
        "id": "bbbbbbb2-bbbb-4bbb-8bbb-bbbbbbbbbbb2",
        "movie_id": INFERNAL_ID,
        "name": "刘健明",
        "aliases": ["刘sir"],
        "actor_name": "刘德华",
        "description": "黑帮潜伏在警队的内鬼，渴望洗白却难逃宿命。",
        "traits": {"性格": "野心", "矛盾": "良知与欲望"},
    },
]

SEED_SCENES: list[dict[str, Any]] = [
    {
        "id": "s1111111-1111-4111-8111-111111111111",
        "movie_id": FAREWELL_ID,
        "scene_number": 1,
        "start_ms": 0,
        "end_ms": 600000,
        "summary": "少年小豆子与小石头在梨园学戏，结下深厚情谊。",
        "location": "北京戏班",
    },
    {
        "id": "s2222222-2222-4222-8222-222222222222",
        "movie_id": INFERNAL_ID,
        "scene_number": 5,
        "start_ms": 1800000,
        "end_ms": 2400000,
        "summary": "凌晨楼顶对峙，陈永仁与刘健明身份危机骤现。",
        "location": "香港高楼天台",
    },
]

SEED_SUBTITLES: list[dict[str, Any]] = [
    {
        "id": "sub11111-1111-4111-8111-111111111111",
        "movie_id": FAREWELL_ID,
        "scene_id": "s1111111-1111-4111-8111-111111111111",
        "character_id": "aaaaaaa1-aaaa-4aaa-8aaa-aaaaaaaaaaa1",
        "start_ms": 120000,
        "end_ms": 125000,
        "speaker": "程蝶衣",
        "text": "师哥，我就是程蝶衣，我一辈子就是程蝶衣。",
        "confidence": 0.98,
        "source": "demo",
    },
    {
        "id": "sub22222-2222-4222-8222-222222222222",
        "movie_id": INFERNAL_ID,
        "scene_id": "s2222222-2222-4222-8222-222222222222",
        "character_id": "bbbbbbb1-bbbb-4bbb-8bbb-bbbbbbbbbbb1",
        "start_ms": 1860000,
        "end_ms": 1868000,
        "speaker": "陈永仁",
        "text": "对不起，我真的是警察。",
        "confidence": 0.99,
        "source": "demo",
    },
]

SEED_SCRIPTS: list[dict[str, Any]] = [
    {
        "id": "scr11111-1111-4111-8111-111111111111",
        "movie_id": FAREWELL_ID,
        "script_title": "霸王别姬剧本节选",
        "plot_text": "讲述程蝶衣与段小楼师兄弟在时代风雨中的裂痕。",
        "screenplay_text": (
            "【剧本片段】\n程蝶衣：师哥，我们从小唱戏，戏比天大。\n"
            "段小楼：如今世道变了，唱戏不能护着我们了。"
        ),
    },
    {
        "id": "scr22222-2222-4222-8222-222222222222",
        "movie_id": INFERNAL_ID,
        "script_title": "无间道剧本节选",
        "plot_text": "警方卧底与黑帮内鬼的双线对峙。",
        "screenplay_text": (
            "【剧本片段】\n陈永仁：我都快忘了自己是谁。\n刘健明：做回自己，很难吗？"
        ),
    },
]

SEED_DIALOGUES: list[dict[str, Any]] = [
    {
        "id": "dlg11111-1111-4111-8111-111111111111",
        "movie_id": FAREWELL_ID,
        "file_name": "farewell_dialogue_demo.txt",
        "dialogue_text": (
            "00:20:00 程蝶衣：师哥，我这一辈子都是程蝶衣。\n"
            "00:20:08 段小楼：我们下了场，就是普通人。"
        ),
        "total_lines": 2,
    },
    {
        "id": "dlg22222-2222-4222-8222-222222222222",
        "movie_id": INFERNAL_ID,
        "file_name": "infernal_dialogue_demo.txt",
        "dialogue_text": (
            "00:31:00 陈永仁：我要上去见黄sir。\n"
            "00:31:05 刘健明：我已经不是以前的我了。"
        ),
        "total_lines": 2,
    },
]


def _insert_many(conn: Any, table: str, rows: list[dict[str, Any]]) -> None:
    columns = list(rows[0])
    conn.executemany(
        f"INSERT INTO {table} ({', '.join(columns)}) "  # noqa: S608
        f"VALUES ({', '.join(':' + c for c in columns)})",
        rows,
    )


def _encode(row: dict[str, Any], *json_fields: str) -> dict[str, Any]:
    encoded = dict(row)
    for field in json_fields:
        encoded[field] = json.dumps(row[field], ensure_ascii=False)
    return encoded


def seed_database(manager: DatabaseConnectionManager) -> dict[str, int]:
    """Replace the database contents with the demo dataset.

    Args:
        manager: Connection manager for the target database

    Returns:
        Number of rows inserted per table
    """
    movies = [_encode(m, "genres") for m in SEED_MOVIES]
    characters = [
        {
            **_encode(c, "aliases", "traits"),
            "is_primary": 1,
            "created_by": SEED_AUTHOR,
        }
        for c in SEED_CHARACTERS
    ]
    scripts = [{**s, "created_by": SEED_AUTHOR} for s in SEED_SCRIPTS]
    dialogues = [{**d, "created_by": SEED_AUTHOR} for d in SEED_DIALOGUES]

    plan = [
        ("movies", movies),
        ("characters", characters),
        ("scenes", SEED_SCENES),
        ("subtitle_segments", SEED_SUBTITLES),
        ("movie_scripts", scripts),
        ("movie_dialogue_files", dialogues),
    ]

    with manager.transaction() as conn:
        for table in DELETE_ORDER:
            conn.execute(f"DELETE FROM {table}")  # noqa: S608
        for table, rows in plan:
            _insert_many(conn, table, rows)

    counts = {table: len(rows) for table, rows in plan}
    logger.info("Seed data inserted", **counts)
    return counts
