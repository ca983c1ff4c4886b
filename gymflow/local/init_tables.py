import asyncio
import json
import logging
import sys

from gymflow.api.middleware.database import setup_connection
from gymflow.api.routes.exercises.save import Exercise, insert_exercise

logger = logging.getLogger(__name__)

tables = [
    """
    create table if not exists exercises (
        id varchar(50) primary key,
        position int not null default 0,
        name varchar(100) not null,
        description text,
        muscle_groups jsonb not null default '[]',
        equipment jsonb not null default '[]',
        difficulty varchar(20),
        sets int,
        reps varchar(20),
        rest varchar(20),
        calories int,
        calories_per_rep int,
        emoji varchar(10),
        requires_gym boolean default false,
        video_url varchar(255)
    )
    """,
    """
    create table if not exists equipment (
        id varchar(50) primary key,
        name varchar(100) not null,
        description text,
        muscle_groups jsonb not null default '[]',
        emoji varchar(10),
        category varchar(50),
        calories_per_hour int,
        image varchar(255)
    )
    """,
    """
    create table if not exists routines (
        id serial primary key,
        name varchar(100) not null,
        objective varchar(50),
        level varchar(20),
        equipment varchar(50),
        day_count int,
        day_labels jsonb not null default '[]',
        focus_by_day jsonb not null default '{}',
        exercises jsonb not null default '{}',
        status varchar(20) not null default 'pending',
        created_at timestamp default (now() at time zone 'utc'),
        updated_at timestamp default (now() at time zone 'utc')
    )
    """,
    """
    create table if not exists user_profiles (
        email varchar(100) primary key,
        name varchar(100),
        notifications_enabled boolean not null default false
    )
    """,
]

async def init_tables():
    conn = await setup_connection()
    if conn is None:
        raise Exception("could not connect to database")
    try:
        for table in tables:
            await conn.execute(table)
        logger.info("database tables initialized")
    finally:
        await conn.close()

async def insert_exercises(path):
    with open(path, "r", encoding="utf-8") as file:
        exercises_json = json.load(file)

    conn = await setup_connection()
    if conn is None:
        raise Exception("could not connect to database")
    try:
        async with conn.transaction():
            await conn.execute(
                """
                delete from exercises;
                """
            )
            for i, exercise in enumerate(exercises_json):
                await insert_exercise(conn, Exercise(**exercise), i)
        logger.info("inserted %d exercises from %s", len(exercises_json), path)
    finally:
        await conn.close()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_tables())
    if len(sys.argv) > 1:
        asyncio.run(insert_exercises(sys.argv[1]))
