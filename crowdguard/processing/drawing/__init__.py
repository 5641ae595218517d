from crowdguard.processing.drawing.overlays import OverlayBox, build_overlays, person_label

__all__ = ["OverlayBox", "build_overlays", "person_label"]
