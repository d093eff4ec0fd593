from shadowshim.transforms.host_context import HostContextTransform
from shadowshim.transforms.shimmer import ShimTransform

BUILTIN_TRANSFORMS = [
    HostContextTransform(),
    ShimTransform(),
]


def apply_transforms(selectors, config, custom_transforms=None):
    """Apply all built-in transforms (and any custom ones) to *selectors*."""
    transforms = list(BUILTIN_TRANSFORMS)
    if custom_transforms:
        transforms.extend(custom_transforms)
    for t in transforms:
        selectors = t.apply(selectors, config)
    return selectors
