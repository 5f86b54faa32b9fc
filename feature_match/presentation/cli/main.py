import argparse
import logging
import sys

from feature_match.application.use_cases.feature_matching import MatchHandler
from feature_match.domain.entities.pipeline_config import PipelineConfig
from feature_match.domain.exceptions import FeatureMatchError
from feature_match.infrastructure.repositories.file_config_repository import FileConfigRepository
from feature_match.infrastructure.repositories.file_image_repository import FileImageRepository
from feature_match.infrastructure.video_processors.frame_reader import FrameReader


def parser():
    parser = argparse.ArgumentParser(
        prog="feature-match",
        description="Match a stream of input images against a reference image with several OpenCV pipelines"
    )
    parser.add_argument('reference', type=str, help="Path to the reference image")
    parser.add_argument('inputs', type=str, help="Input image, folder of images or video file")
    parser.add_argument('--config', type=str, default=None,
                        help="JSON pipeline config; --features/--matchers override it")
    parser.add_argument('--features', nargs='+', default=None,
                        help="Feature algorithms: sift, surf, orb, kaze, brisk")
    parser.add_argument('--matchers', nargs='+', default=None,
                        help="Matcher algorithm per feature: flann, bf")
    parser.add_argument('--accept-delta', type=float, default=0.0,
                        help="Change applied to the acceptance ratio before matching")
    parser.add_argument('--accept-steps', type=int, default=0,
                        help="Number of config ratio_step increments applied to the acceptance ratio (negative lowers it)")
    parser.add_argument('--max-height', type=int, default=None, help="Maximum composite height in pixels")
    parser.add_argument('--output-dir', type=str, default="data/results", help="Where composites are written")
    parser.add_argument('--frame-skip', type=int, default=1, help="Use every n-th video frame")
    parser.add_argument('--log-level', type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def build_config(args) -> PipelineConfig:
    config = FileConfigRepository(args.config).load() if args.config else PipelineConfig()
    if args.features is not None:
        config.features = args.features
    if args.matchers is not None:
        config.matchers = args.matchers
    elif args.features is not None and len(config.matchers) != len(args.features):
        config.matchers = [config.matchers[0]] * len(args.features)
    if args.max_height is not None:
        config.max_height = args.max_height
    return config.validate()


def run(args) -> int:
    config = build_config(args)
    image_repository = FileImageRepository(args.output_dir, FrameReader(args.frame_skip))

    handler = MatchHandler.from_config(config)
    delta = args.accept_delta + args.accept_steps * config.ratio_step
    if delta:
        handler.change_accept_ratio(delta)
    print(f"🔧 Pipelines: {', '.join(handler.pipeline_names)} (accept ratio {handler.accept_ratio:.2f})")

    handler.set_reference_image(image_repository.load_image(args.reference))

    count = 0
    for idx, image in enumerate(image_repository.iter_input_images(args.inputs)):
        results = handler.match_image(image)
        composite = handler.draw_match_result(config.max_height)
        path = image_repository.save_image(composite, f"match_{idx:04d}.jpg")

        summary = ", ".join(
            f"{name}: {res.num_matches}/{res.raw_match_count}"
            for name, res in zip(handler.pipeline_names, results)
        )
        marker = "✅" if all(res.has_enough_matches() for res in results) else "⚠️"
        print(f"{marker} [{idx}] {summary} -> {path}")
        count += 1

    if count == 0:
        print(f"❌ No input images found in {args.inputs}")
        return 1
    print(f"🎯 Processed {count} input image(s)")
    return 0


def main(argv=None) -> int:
    args = parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    try:
        return run(args)
    except (FeatureMatchError, OSError) as e:
        print(f"❌ {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
