from algostep.sort.bubble_sort_tracker import iter_bubble_sort_steps, generate_bubble_sort_steps
from algostep.sort.insertion_sort_tracker import iter_insertion_sort_steps, generate_insertion_sort_steps
from algostep.sort.heap_sort_tracker import iter_heap_sort_steps, generate_heap_sort_steps
from algostep.sort.quicksort_tracker import iter_quicksort_steps, generate_quicksort_steps
from algostep.sort.merge_sort_tracker import iter_merge_sort_steps, generate_merge_sort_steps
