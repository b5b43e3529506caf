"""Populate the database with demo data.

Usage:
    python -m src.autobuilder.seed [--create-tables]

Idempotent on the demo user: when it already exists nothing is added.
"""

import argparse
import asyncio
import json

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel import SQLModel

from src.autobuilder.core.config import get_settings
from src.autobuilder.core.db import dispose_engine, get_engine, get_session
from src.autobuilder.core.logging import get_logger, setup_logging
from src.autobuilder.core.security import hash_password
from src.autobuilder.models import (
    AiRequest,
    AiRequestStatus,
    AiRequestType,
    Project,
    ProjectFile,
    ProjectStatus,
    ProjectType,
    Template,
    TemplateCategory,
    User,
)
from src.autobuilder.repositories import TemplateRepository, UserRepository

logger = get_logger(__name__)

DEMO_EMAIL = "demo@blockchainai.dev"
DEMO_PASSWORD = "password123"

SAMPLE_PROJECTS = [
    {
        "name": "DeFi Trading Bot",
        "description": "Automated trading bot for MultiversX DeFi protocols",
        "type": ProjectType.DEFI,
        "status": ProjectStatus.ACTIVE,
        "config": {
            "framework": "next.js",
            "blockchain": "multiversx",
            "features": ["trading", "analytics", "notifications"],
        },
        "ai_generated": True,
    },
    {
        "name": "NFT Marketplace",
        "description": "Decentralized marketplace for digital collectibles",
        "type": ProjectType.NFT,
        "status": ProjectStatus.DRAFT,
        "config": {
            "framework": "react",
            "blockchain": "multiversx",
            "features": ["minting", "trading", "auctions"],
        },
        "ai_generated": False,
    },
    {
        "name": "Staking Platform",
        "description": "Liquid staking protocol with rewards",
        "type": ProjectType.DEFI,
        "status": ProjectStatus.COMPLETED,
        "config": {
            "framework": "vue.js",
            "blockchain": "multiversx",
            "features": ["staking", "rewards", "governance"],
        },
        "ai_generated": True,
    },
]

TRADING_BOT_COMPONENT = """import { useState } from 'react'

export function TradingBot() {
  const [isActive, setIsActive] = useState(false)

  return (
    <div className="trading-bot">
      <h2>DeFi Trading Bot</h2>
      <button onClick={() => setIsActive(!isActive)}>
        {isActive ? 'Stop' : 'Start'} Bot
      </button>
    </div>
  )
}
"""

SAMPLE_TEMPLATES = [
    {
        "name": "Next.js Web3 Starter",
        "description": "Complete Next.js template with MultiversX integration",
        "category": TemplateCategory.FULLSTACK,
        "config": {
            "framework": "next.js",
            "styling": "tailwind",
            "features": ["wallet-connect", "smart-contracts", "responsive"],
        },
        "files": {
            "package.json": {"dependencies": {"next": "^15.0.0"}},
            "src/app/page.tsx": {
                "content": "export default function Home() { return <div>Hello Web3!</div> }"
            },
        },
        "tags": ["nextjs", "web3", "multiversx", "starter"],
    },
    {
        "name": "Smart Contract Template",
        "description": "MultiversX smart contract boilerplate in Rust",
        "category": TemplateCategory.SMART_CONTRACT,
        "config": {
            "language": "rust",
            "framework": "multiversx-sc",
            "features": ["access-control", "events", "storage"],
        },
        "files": {
            "Cargo.toml": {"content": '[package]\nname = "my-contract"'},
            "src/lib.rs": {"content": "#![no_std]\n\nuse multiversx_sc::imports::*;"},
        },
        "tags": ["rust", "smart-contract", "multiversx"],
    },
]


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables from model metadata (local SQLite runs, tests)."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def seed(session: AsyncSession) -> bool:
    """Insert the demo data. Returns False when the demo user already exists."""
    users = UserRepository(session)
    if await users.exists_by_email(DEMO_EMAIL):
        logger.info("Demo user already exists, skipping seed", email=DEMO_EMAIL)
        return False

    demo = User(
        email=DEMO_EMAIL,
        name="Demo User",
        hashed_password=hash_password(DEMO_PASSWORD),
        bio="Demo user for BlockchainAI AutoBuilder",
    )
    users.add(demo)
    await session.flush()

    for data in SAMPLE_PROJECTS:
        project = Project(
            name=data["name"],
            description=data["description"],
            type=data["type"].value,
            status=data["status"].value,
            config=data["config"],
            ai_generated=data["ai_generated"],
            user_id=demo.id,
        )
        session.add(project)
        await session.flush()

        if project.name == "DeFi Trading Bot":
            package = {
                "name": "defi-trading-bot",
                "version": "1.0.0",
                "dependencies": {"@multiversx/sdk-core": "^13.0.0", "next": "^15.0.0"},
            }
            session.add(
                ProjectFile(
                    project_id=project.id,
                    filename="package.json",
                    path="package.json",
                    content=json.dumps(package, indent=2) + "\n",
                    language="json",
                )
            )
            session.add(
                ProjectFile(
                    project_id=project.id,
                    filename="TradingBot.tsx",
                    path="src/components/TradingBot.tsx",
                    content=TRADING_BOT_COMPONENT,
                    language="typescript",
                    generated_by_ai=True,
                    ai_prompt="Create a React component for a DeFi trading bot interface",
                )
            )

    templates = TemplateRepository(session)
    for data in SAMPLE_TEMPLATES:
        if await templates.get_by_name(data["name"]) is not None:
            continue
        templates.add(
            Template(
                name=data["name"],
                description=data["description"],
                category=data["category"].value,
                config=data["config"],
                files=data["files"],
                author="BlockchainAI Team",
                tags=data["tags"],
                featured=True,
            )
        )

    session.add(
        AiRequest(
            type=AiRequestType.CODE_GENERATION.value,
            prompt="Create a React component for wallet connection",
            response="export function WalletConnect() { /* component code */ }",
            status=AiRequestStatus.COMPLETED.value,
            tokens_used=150,
            model="gpt-4",
            context={"framework": "react", "language": "typescript"},
            user_id=demo.id,
        )
    )

    await session.commit()
    logger.info(
        "Database seeded",
        projects=len(SAMPLE_PROJECTS),
        templates=len(SAMPLE_TEMPLATES),
    )
    return True


async def main(create: bool = False) -> None:
    setup_logging(get_settings().debug)
    engine = get_engine()
    try:
        if create:
            await create_tables(engine)
        async with get_session(engine) as session:
            await seed(session)
    finally:
        await dispose_engine()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the database with demo data")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="create tables from model metadata first (instead of running migrations)",
    )
    args = parser.parse_args()
    asyncio.run(main(create=args.create_tables))
