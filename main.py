import argparse
import asyncio
import sys

import aiofiles
import uvicorn

from placement_studio.bootstrap.bootstrapper import bootstrap_app
from placement_studio.components.configuration.configuration_interface import (
    ConfigurationInterface,
)
from placement_studio.dependencies.components import get_components
from placement_studio.dependencies.services import (
    get_encoder_service,
    get_generation_service,
)
from placement_studio.entities.errors import StudioError
from placement_studio.services.EncoderService.encoder_service import FileImageSource


async def generate_to_file(
    env: str, character_path: str, product_path: str, output_path: str
) -> None:
    components = get_components(env=env)
    encoder = get_encoder_service(components)
    generation_service = get_generation_service(components)

    character = await encoder.encode(FileImageSource(character_path))
    product = await encoder.encode(FileImageSource(product_path))
    result = await generation_service.generate(character, product)

    _, data = encoder.decode_data_uri(result)
    async with aiofiles.open(output_path, "wb") as handle:
        await handle.write(data)


def serve(env: str) -> None:
    configuration = get_components(env=env).get_component(ConfigurationInterface)
    uvicorn.run(
        bootstrap_app(env=env),
        host=configuration.get_configuration("HOST", str, default="127.0.0.1"),
        port=configuration.get_configuration("PORT", int, default=8000),
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Product placement studio")
    parser.add_argument("--env", default="development")
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("serve", help="Run the web studio")

    generate = commands.add_parser("generate", help="Generate one image and exit")
    generate.add_argument("--character", required=True)
    generate.add_argument("--product", required=True)
    generate.add_argument("--output", default="generated-product-placement.png")

    args = parser.parse_args(argv)

    if args.command == "generate":
        try:
            asyncio.run(
                generate_to_file(args.env, args.character, args.product, args.output)
            )
        except StudioError as error:
            print(f"Error: {error}", file=sys.stderr)
            return 1
        print(f"Saved {args.output}")
        return 0

    serve(args.env)
    return 0


if __name__ == "__main__":
    sys.exit(main())
