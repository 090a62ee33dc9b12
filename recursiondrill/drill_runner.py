import asyncio
import json
import os
import time

import numpy as np

from .config import DrillConfig
from .drill_result import DrillResult
from .evaluators import EvaluationCache
from .problems import Problem, get_problem

from asyncio import Semaphore
from datetime import datetime, timezone


class EquivalenceError(RuntimeError):
    """Raised when the memoized and naive evaluators disagree."""


class DrillRunner:
    """
    Runs a problem's evaluators over a range of drill sizes and records the outcome.
    """

    def __init__(self,
                 problem: Problem = None,
                 inputs = None,
                 inputs_min = 0,
                 inputs_max = 30,
                 inputs_num_intervals = 10,
                 compare_naive = True,
                 naive_limit = None,
                 share_cache = True,
                 results_version = 1,
                 num_concurrent_requests = 1,
                 save_results = False,
                 overwrite_results = False,
                 results_dir = "results",
                 print_ongoing_status = True,
                 **kwargs):
        """
        :param problem: The problem to drill, or the name of a catalogued one.
        :param inputs: Explicit drill sizes. Default is None.
        :param inputs_min: The minimum drill size. Default is 0.
        :param inputs_max: The maximum drill size. Default is 30.
        :param inputs_num_intervals: The number of sizes between min and max. Default is 10.
        :param compare_naive: Whether to also run the naive evaluator and check that both agree. Default is True.
        :param naive_limit: Largest size the naive evaluator is run on. Defaults to the problem's own limit.
        :param share_cache: Whether every size shares one memoization cache. Default is True.
        :param results_version: In case you would like to run the same sizes multiple times, change the results version other than 1
        :param num_concurrent_requests: Number of sizes evaluated concurrently, default = 1.
        :param save_results: Whether or not you would like to save each result to a JSON file. Default is False.
        :param overwrite_results: Whether to re-run sizes that already have a saved result. Default is False.
        :param results_dir: Directory the JSON results are written to. Default is "results".
        :param print_ongoing_status: Whether or not to print the ongoing status. Default is True.
        :param kwargs: Passed to the problem constructor when ``problem`` is a name.
        """
        if not problem:
            raise ValueError("A problem must be provided to drill.")
        if isinstance(problem, str):
            problem = get_problem(problem, **kwargs)

        self.problem = problem
        self.compare_naive = compare_naive
        self.naive_limit = naive_limit if naive_limit is not None else problem.naive_limit
        self.share_cache = share_cache
        self.results_version = results_version
        self.num_concurrent_requests = num_concurrent_requests
        self.save_results = save_results
        self.overwrite_results = overwrite_results
        self.results_dir = results_dir
        self.print_ongoing_status = print_ongoing_status
        self.drill_results = []

        if num_concurrent_requests < 1:
            raise ValueError("num_concurrent_requests must be at least 1.")

        if inputs is None:
            if inputs_min is None or inputs_max is None or inputs_num_intervals is None:
                raise ValueError("Either inputs_min, inputs_max, inputs_num_intervals need to be filled out OR the inputs list needs to be supplied.")
            if inputs_min > inputs_max:
                raise ValueError("inputs_min must not be greater than inputs_max.")
            self.inputs = [int(size) for size in np.unique(np.round(np.linspace(inputs_min, inputs_max, num=inputs_num_intervals, endpoint=True)).astype(int))]
        else:
            self.inputs = [int(size) for size in inputs]

        if not self.inputs:
            raise ValueError("At least one drill input is required.")

        self.cache = EvaluationCache() if share_cache else None

    @classmethod
    def from_config(cls, config: DrillConfig, **kwargs):
        return cls(**config.model_dump(), **kwargs)

    async def bound_evaluate_and_log(self, sem, *args):
        async with sem:
            await self.evaluate_and_log(*args)

    async def run_drill(self):
        sem = Semaphore(self.num_concurrent_requests)

        tasks = []
        for size in self.inputs:
            task = self.bound_evaluate_and_log(sem, size)
            tasks.append(task)

        # Wait for all tasks to complete
        await asyncio.gather(*tasks)

    async def evaluate_and_log(self, size):
        # Lets an interrupted run pick up where it stopped
        if self.save_results and not self.overwrite_results:
            if self.result_exists(size):
                print("Warning! Skipping evaluation - the result already exists for problem ", self.problem.name, " and size ", size)
                return

        drill_result = await asyncio.to_thread(self.evaluate_size, size)
        results = drill_result.model_dump()

        self.drill_results.append(results)

        if self.print_ongoing_status:
            print(f"-- Drill Summary -- ")
            print(f"Problem: {self.problem.name}{tuple(drill_result.arguments)}")
            print(f"Result: {drill_result.result}")
            print(f"Memoized: {drill_result.memoized_body_evaluations} body evaluations, {drill_result.duration_seconds:.4f} seconds")
            if drill_result.naive_result is not None:
                print(f"Naive: {drill_result.naive_body_evaluations} body evaluations, {drill_result.naive_duration_seconds:.4f} seconds")
            print(f"Cache entries: {drill_result.cache_entries}\n")

        if self.save_results:
            file_location = self.result_file_location(size)
            results['file_name'] = file_location

            if not os.path.exists(self.results_dir):
                os.makedirs(self.results_dir)

            with open(os.path.join(self.results_dir, f'{file_location}_results.json'), 'w') as f:
                json.dump(results, f)

    def evaluate_size(self, size) -> DrillResult:
        arguments = self.problem.drill_arguments(size)
        drill_result = DrillResult(
            problem=self.problem.name,
            problem_tag=self.problem.result_tag(),
            size=size,
            arguments=list(arguments),
            version=self.results_version,
        )

        memoized = self.problem.memoized(cache=self.cache)
        start_time = time.perf_counter()
        result = memoized.evaluate(*arguments)
        drill_result.duration_seconds = time.perf_counter() - start_time

        drill_result.result = result
        drill_result.memoized_calls = memoized.calls
        drill_result.memoized_body_evaluations = memoized.body_evaluations
        drill_result.cache_entries = len(memoized.cache)

        if self.cache is None:
            drill_result.cold_body_evaluations = memoized.body_evaluations
        else:
            cold = self.problem.memoized()
            cold.evaluate(*arguments)
            drill_result.cold_body_evaluations = cold.body_evaluations

        if self.compare_naive and size <= self.naive_limit:
            naive = self.problem.naive()
            start_time = time.perf_counter()
            naive_result = naive.evaluate(*arguments)
            drill_result.naive_duration_seconds = time.perf_counter() - start_time

            drill_result.naive_result = naive_result
            drill_result.naive_calls = naive.calls
            drill_result.naive_body_evaluations = naive.body_evaluations
            drill_result.matches = naive_result == result

            if not drill_result.matches:
                raise EquivalenceError(
                    f"{self.problem.name}{arguments}: memoized returned {result}, naive returned {naive_result}."
                )

        drill_result.timestamp_utc = datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S%z')
        return drill_result

    def result_file_location(self, size):
        return f'{self.problem.result_tag()}_size_{size}_v{self.results_version}'

    def result_exists(self, size):
        """
        Checks to see if a result has already been recorded or not
        """

        if not os.path.exists(self.results_dir):
            print("Results dir doesn't exist yet.")
            return False

        for filename in os.listdir(self.results_dir):
            if filename.endswith('.json'):
                with open(os.path.join(self.results_dir, filename), 'r') as f:
                    result = json.load(f)
                    problem_met = result.get('problem_tag') == self.problem.result_tag()
                    size_met = result.get('size') == size
                    version_met = result.get('version', 1) == self.results_version
                    if problem_met and size_met and version_met:
                        return True
        return False

    def get_results(self):
        return self.drill_results

    def print_start_drill_summary(self):
        print("\n")
        print("Starting Recursion Drill...")
        print(f"- Problem: {self.problem.name} ({self.problem.description})")
        print(
            f"- Inputs: {len(self.inputs)}, Min: {min(self.inputs)}, Max: {max(self.inputs)}"
        )
        print(f"- Naive comparison: {'up to ' + str(self.naive_limit) if self.compare_naive else 'off'}")
        print(f"- Shared cache: {self.share_cache}")
        print("\n\n")

    def print_end_drill_summary(self):
        durations = [result['duration_seconds'] for result in self.drill_results]
        naive_durations = [
            result['naive_duration_seconds']
            for result in self.drill_results
            if result['naive_duration_seconds'] is not None
        ]
        print("Recursion Drill finished.")
        print(f"- Evaluated: {len(self.drill_results)} inputs")
        if durations:
            print(f"- Memoized mean duration: {np.mean(durations):.4f} seconds")
        if naive_durations:
            print(f"- Naive mean duration: {np.mean(naive_durations):.4f} seconds")
        if self.cache is not None:
            stats = self.cache.stats()
            print(f"- Cache: {stats['entries']} entries, {stats['hits']} hits, {stats['misses']} misses")

    def start_drill(self):
        if self.print_ongoing_status:
            self.print_start_drill_summary()
        asyncio.run(self.run_drill())
        if self.print_ongoing_status:
            self.print_end_drill_summary()
        return self.get_results()
