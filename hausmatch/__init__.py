# hausmatch - locate a pattern in a scene by symmetric Hausdorff distance
from .distance import distance_field, edge_points
from .edges import detect_edges
from .models import (Offset, Pose, SearchWindow, MatchResult,
                     EdgeMap, MatchContext)
from .hausdorff import (MAX_DISTANCE, directed_distance, count_considered,
                        symmetric_distance)
from .translation import grid_search_translation, hierarchical_search_translation
from .transform import rotate_scale
from .pose import pose_search, pose_grid, SearchCancelled
from .io import load_image, save_image, ImageLoadError
from .config import MatchConfig
